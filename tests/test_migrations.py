"""Tests that the Alembic migration matches the ORM schema."""

import importlib.util
from pathlib import Path

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations

from contact_identity.models.contact import Contact

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "config" / "alembic" / "versions"


def _load_migration(filename: str):
    spec = importlib.util.spec_from_file_location(filename[:-3], VERSIONS_DIR / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_create_contacts_matches_model_nullability():
    migration = _load_migration("001_create_contacts.py")
    engine = sa.create_engine("sqlite://")
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            migration.upgrade()
        columns = {c["name"]: c for c in sa.inspect(conn).get_columns("contacts")}

    model_columns = Contact.__table__.columns
    assert set(columns) == {c.name for c in model_columns}
    for column in model_columns:
        if column.primary_key:
            continue
        assert columns[column.name]["nullable"] == column.nullable, column.name
    assert columns["created_at"]["nullable"] is False
    assert columns["updated_at"]["nullable"] is False
