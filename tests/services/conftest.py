"""Service test fixtures - async DB, wired Mediator, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_mediator dependency overridden with a Mediator on the test DB
    - db_manager patched so readiness checks see the test engine
"""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from phonebook.api.routes.phonebook import get_mediator
from phonebook.db.base import Base
from phonebook.infrastructure.database import DatabaseSessionManager
from phonebook.models.phonebook_entry import PhoneBookEntry
from phonebook.services.mediator import build_mediator
import phonebook.infrastructure.database as db_module
from phonebook.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def mediator(test_session_factory):
    """Mediator wired against the test DB, no deadline."""
    return build_mediator(test_session_factory)


@pytest.fixture
def override_mediator():
    """Swap the Mediator behind the routes. Call with any Mediator."""
    def _override(m):
        app.dependency_overrides[get_mediator] = lambda: m
    yield _override
    app.dependency_overrides.pop(get_mediator, None)


@pytest.fixture
async def client(test_engine, test_session_factory, mediator, override_mediator):
    """FastAPI test client routed to the test DB."""
    override_mediator(mediator)

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager.in_memory = True
    fake_manager._session_factory = test_session_factory
    fake_manager._memory_lock = asyncio.Lock()
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


@pytest.fixture
async def seed_entries(test_db):
    """John Doe (id 1) and Jane Smith (id 2)."""
    rows = [
        PhoneBookEntry(name="John Doe", phone_number="123-456-7890"),
        PhoneBookEntry(name="Jane Smith", phone_number="987-654-3210"),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    for row in rows:
        await test_db.refresh(row)
    return rows
