"""Service test fixtures - async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the favorites table
    - get_db dependency overridden to use test DB sessions
    - app.state.db_manager points at the test engine for the readiness check
    - broken_db / spy_db replace storage with fakes for failure and no-IO assertions

Design Decisions:
    - SQLite in-memory over StaticPool: one shared connection, so rows written
      through the client are visible to test_db
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from favorites_api.db.base import Base
from favorites_api.infrastructure.database import get_db, DatabaseSessionManager
from favorites_api.models.favorite import Favorite
from favorites_api.main import app


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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    app.state.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = None


@pytest.fixture
def favorite_fields():
    return {
        "session_id": "s1",
        "user_name": "alice_w",
        "name": "Alice",
        "professional_headline": "Staff Engineer",
        "img_url": "http://x/img.png",
    }


@pytest.fixture
async def seed_favorite(test_db, favorite_fields):
    """Insert one favorite directly into the test DB."""
    favorite = Favorite(**favorite_fields)
    test_db.add(favorite)
    await test_db.commit()
    await test_db.refresh(favorite)
    return favorite


class _SpySession:
    """Stands in for AsyncSession; records every call and optionally fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.executed = []
        self.rollbacks = 0
        self.commits = 0

    async def execute(self, statement, *args, **kwargs):
        self.executed.append(statement)
        if self.error is not None:
            raise self.error
        raise AssertionError("spy session cannot run real statements")

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


def _install_session(session: _SpySession) -> None:
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
async def spy_db():
    """Session that must never be used; tests assert executed == []."""
    session = _SpySession()
    _install_session(session)
    yield session
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_db():
    """Session whose every statement fails like a dropped connection."""
    session = _SpySession(
        OperationalError(
            "SELECT", {}, Exception("connection to server was lost"),
        ),
    )
    _install_session(session)
    yield session
    app.dependency_overrides.clear()


@pytest.fixture
async def faulty_db():
    """Session that fails with a non-database bug."""
    session = _SpySession(RuntimeError("mapper bug"))
    _install_session(session)
    yield session
    app.dependency_overrides.clear()


# Nothing listens on port 1: connects are refused before any SQL runs
UNREACHABLE_DATABASE_URL = "postgresql+asyncpg://u:p@127.0.0.1:1/favorites"


@pytest.fixture
async def unreachable_client():
    """Client served by a real session manager whose database refuses connections."""
    manager = DatabaseSessionManager(
        UNREACHABLE_DATABASE_URL, pool_size=1, max_overflow=0,
    )
    app.state.db_manager = manager
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.db_manager = None
    await manager.dispose()


@pytest.fixture
async def raw_client():
    """Client without DB overrides; pair with spy_db or broken_db."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
