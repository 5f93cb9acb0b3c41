import os
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, engine_from_config, pool

# Add the project root to sys.path so we can import our models
project_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(project_root / "src"))

from contact_identity.config.settings import get_settings  # noqa: E402
from contact_identity.models import Base  # noqa: E402

# this is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url") or get_settings().database_url_sync
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    # ALEMBIC_DATABASE_URL wins, then alembic.ini, then application settings
    url_override = os.environ.get("ALEMBIC_DATABASE_URL")
    section = config.get_section(config.config_ini_section, {})

    if url_override:
        connectable = create_engine(url_override, poolclass=pool.NullPool)
    elif section.get("sqlalchemy.url"):
        connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    else:
        connectable = create_engine(get_settings().database_url_sync, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
