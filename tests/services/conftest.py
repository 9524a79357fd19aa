"""Service test fixtures — async DB, FastAPI test client, seeded accounts.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe and lifespan-free code see the test DB
    - Seeded users are inserted directly; tokens are minted without the login route

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific behavior is not exercised here)
    - Assertions on state prefer API reads over test_db: each request uses its own
      session, so test_db's identity map can lag behind
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from lawconnect.db.base import Base
from lawconnect.infrastructure.database import get_db, DatabaseSessionManager
from lawconnect.infrastructure.security import hash_password
from lawconnect.models.user import User
import lawconnect.infrastructure.database as db_module
from lawconnect.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_user(test_db):
    """Factory: insert a user with password "secret123"."""
    counter = {"n": 0}

    async def _make(role: str = "client", name: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"{role.title()} {counter['n']}",
            email=f"{role}{counter['n']}@example.com",
            password_hash=hash_password("secret123"),
            role=role,
        )
        test_db.add(user)
        await test_db.commit()
        await test_db.refresh(user)
        return user

    return _make


@pytest.fixture
async def client_user(make_user):
    return await make_user("client")


@pytest.fixture
async def other_client(make_user):
    return await make_user("client")


@pytest.fixture
async def lawyer_user(make_user):
    return await make_user("lawyer")


@pytest.fixture
async def other_lawyer(make_user):
    return await make_user("lawyer")


@pytest.fixture
async def admin_user(make_user):
    return await make_user("admin")
