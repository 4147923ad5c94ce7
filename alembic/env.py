"""Migration runner for the phonebook_entries schema (durable backend only).

The volatile backend never sees these migrations: the app builds its schema
with create_all at startup when USE_IN_MEMORY_DATABASE is set.

Design Decisions:
    - URL resolution mirrors phonebook.config.Settings, including the
      postgresql:// -> postgresql+asyncpg:// rewrite
    - Migrations run on a NullPool async engine that is disposed afterwards
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from phonebook.config import Settings
from phonebook.db.base import Base
import phonebook.models  # noqa: F401  registers PhoneBookEntry on Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def phonebook_database_url() -> str:
    """DATABASE_URL (or .env) when set, else sqlalchemy.url from alembic.ini."""
    settings = Settings()
    if "database_url" in settings.model_fields_set:
        return settings.database_url
    return config.get_main_option("sqlalchemy.url")


def migrate_offline() -> None:
    """Emit the phonebook DDL as SQL text without connecting."""
    context.configure(
        url=phonebook_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = phonebook_database_url()
    engine = async_engine_from_config(
        section, prefix="sqlalchemy.", poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(_apply)
    await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
