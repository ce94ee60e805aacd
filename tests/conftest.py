"""
Flashdeck Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the whole suite.
How:   Each test gets its own SQLite database file (aiosqlite) with every
       table created. The API client overrides the session dependency so
       requests run against that database.

Fixture Hierarchy (all function-scoped):
    db_engine ── session_factory ─┬── storage        (SQLAlchemyStorage on one session)
                                  ├── user           (a committed User row)
                                  └── test_client    (HTTPX AsyncClient on the app)
"""

import os

# Settings are read at import time: configure before importing flashdeck.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

import uuid  # noqa: E402
from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from flashdeck.database import create_tables, get_db_session  # noqa: E402
from flashdeck.models import Card, CardSet, User  # noqa: E402
from flashdeck.services.storage import SQLAlchemyStorage  # noqa: E402


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'flashdeck.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def storage(session_factory) -> AsyncGenerator[SQLAlchemyStorage, None]:
    """
    Storage bound to a single open session.

    Usage:
        async def test_insert(storage):
            card_id = await storage.insert(Card(front="a", back="b", card_set_id=uuid4()))
    """
    async with session_factory() as session:
        yield SQLAlchemyStorage(session)


@pytest_asyncio.fixture
async def user(session_factory) -> User:
    """A committed user row, for card sets that need a real owner."""
    async with session_factory() as session:
        row = User(name="Ada")
        session.add(row)
        await session.commit()
        return row


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    The request session dependency is overridden to use this test's
    database, with the same commit/rollback behaviour as production.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/cards")
            assert response.status_code == 200
    """
    from flashdeck.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def card_payload():
    """Factory for a valid POST /cards body."""
    def make(card_set_id, front="Mitosis", back="Cell division"):
        return {"front": front, "back": back, "card_set_id": str(card_set_id)}
    return make


@pytest.fixture
def sample_card() -> Card:
    """A transient card with every field populated, identifier included."""
    return Card(
        id=uuid.uuid4(),
        front="Osmosis",
        back="Diffusion of water across a membrane",
        card_set_id=uuid.uuid4(),
    )


@pytest.fixture
def sample_card_set() -> CardSet:
    return CardSet(id=uuid.uuid4(), description="Biology", user_id=uuid.uuid4())
