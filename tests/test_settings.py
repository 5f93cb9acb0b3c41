"""Tests for settings and logging configuration."""

import logging

import structlog

from contact_identity.config.settings import Settings
from contact_identity.logging_config import configure_logging, mask_identifiers


def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("CONTACT_IDENTITY_DATABASE_URL", "sqlite+aiosqlite:///contacts.db")
    monkeypatch.setenv("CONTACT_IDENTITY_LOG_JSON", "false")
    settings = Settings()
    assert settings.database_url == "sqlite+aiosqlite:///contacts.db"
    assert settings.log_json is False
    assert settings.port == 3000


def test_mask_identifiers():
    event = {"event": "x", "email": "lorraine@hillvalley.edu", "phone": "1234", "contact_id": 7}
    masked = mask_identifiers(None, "info", dict(event))
    assert masked["email"] == "lo***"
    assert masked["phone"] == "***"
    assert masked["contact_id"] == 7


def test_configure_logging_console(capsys):
    configure_logging(json_output=False, log_level="DEBUG")
    try:
        assert logging.getLogger().level == logging.DEBUG
        structlog.get_logger("test").info("hello", email="lorraine@hillvalley.edu")
        out = capsys.readouterr().out
    finally:
        logging.getLogger().handlers.clear()
        structlog.reset_defaults()
        logging.getLogger().setLevel(logging.WARNING)

    assert "hello" in out
    assert "lorraine@hillvalley.edu" not in out
