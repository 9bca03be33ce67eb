from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import pool
from alembic import context

from ledgerbook.core.config import settings
from ledgerbook.core.database import Base, make_engine
from ledgerbook import models  # noqa: F401 - register the mapped tables

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# LEDGER_DATABASE_URL wins over alembic.ini
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # Same engine setup as the app, so SQLite FKs are enforced during upgrades
    connectable = make_engine(config.get_main_option("sqlalchemy.url"), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        # SQLite cannot ALTER most constraints in place
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
