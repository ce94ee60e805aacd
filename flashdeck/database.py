"""
Flashdeck Backend — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       session-per-request FastAPI dependency.
How:   The dependency yields one AsyncSession per request, commits when the
       handler returns and rolls back when anything raises. Storage calls
       only flush, so a request is the unit of work.
When:  Engine is created at import; sessions are created per request.

Connection Pooling:
    Server databases get a QueuePool sized from settings (pool_size,
    max_overflow, pre_ping, 1h recycle). SQLite URLs keep SQLAlchemy's
    default pool for the dialect, which rejects those arguments.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from flashdeck.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine & Session Factory ──────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# expire_on_commit=False: entities stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the app, `create_tables()` and Alembic.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a new session from the factory
        2. Yields it to the route (storage calls flush, never commit)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine | None = None) -> None:
    """
    Create every table registered on `Base.metadata` that does not exist yet.

    Used at startup when DB_CREATE_TABLES is set, and by the test suite.
    Production schemas are managed by Alembic.
    """
    # Register the models on Base.metadata before creating anything.
    import flashdeck.models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))


async def dispose_engine() -> None:
    """Closes all pooled connections. Called on application shutdown."""
    await engine.dispose()
