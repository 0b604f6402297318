"""Test fixtures — a fresh in-memory database per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite in-memory engine (StaticPool, so every
   session shares the single connection that holds the database).
2. get_db is overridden so each request opens its own session on that
   engine, exactly like production.
3. Every client has its own cookie jar, so two clients are two users.

Auth is NOT mocked: tests register and log in through the real API,
because the session cookie flow is the thing under test.
"""

import os
import uuid
from contextlib import AsyncExitStack

# Must be set before tasktrack.config is imported
os.environ.setdefault("TASKTRACK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKTRACK_BCRYPT_ROUNDS", "4")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tasktrack.db.engine import get_db
from tasktrack.db.models import Base
from tasktrack.main import app

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "password_123"


@pytest_asyncio.fixture()
async def engine():
    """Per-test engine with the schema created from the models."""
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine):
    """Direct session for service-level tests and for poking at rows.

    When mixing this with HTTP calls, commit after writing so the shared
    connection isn't left inside an open transaction.
    """
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture()
async def test_app(engine):
    """The app with get_db pointed at the test engine."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def make_client(test_app):
    """Factory for independent HTTP clients (one cookie jar each).

    Pass raise_app_exceptions=False to see the 500 response the server
    sends for an unhandled exception instead of the exception itself.
    """
    async with AsyncExitStack() as stack:

        async def _make(raise_app_exceptions: bool = True) -> AsyncClient:
            transport = ASGITransport(
                app=test_app, raise_app_exceptions=raise_app_exceptions
            )
            return await stack.enter_async_context(
                AsyncClient(transport=transport, base_url="http://test")
            )

        yield _make


@pytest_asyncio.fixture()
async def client(make_client):
    """Anonymous client, no session."""
    return await make_client()


@pytest_asyncio.fixture()
async def login_as(make_client):
    """Register a fresh user and return a client logged in as them."""

    async def _login(username: str, **client_options) -> AsyncClient:
        c = await make_client(**client_options)
        email = f"{username}-{uuid.uuid4().hex[:8]}@example.com"
        r = await c.post(
            "/api/register",
            json={"username": username, "email": email, "password": DEFAULT_PASSWORD},
        )
        assert r.status_code == 200, r.text
        r = await c.post(
            "/api/login", json={"email": email, "password": DEFAULT_PASSWORD}
        )
        assert r.status_code == 200, r.text
        return c

    return _login


@pytest_asyncio.fixture()
async def alice(login_as):
    return await login_as("alice")


@pytest_asyncio.fixture()
async def bob(login_as):
    return await login_as("bob")
