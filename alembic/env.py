"""
Alembic environment for Flashdeck.

The target URL is DATABASE_URL from flashdeck.config; alembic.ini only
carries logging. Online runs use a throwaway async engine (NullPool) and hand
a sync connection to Alembic through run_sync().
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool
from alembic import context

import flashdeck.models  # noqa: F401  (populates Base.metadata)
from flashdeck.config import settings
from flashdeck.database import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

MIGRATION_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    # SQLite cannot ALTER most constraints in place.
    "render_as_batch": settings.is_sqlite,
}


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as conn:
            await conn.run_sync(_migrate)
    finally:
        await engine.dispose()


def migrate_offline() -> None:
    """`alembic upgrade --sql`: print the DDL instead of executing it."""
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
