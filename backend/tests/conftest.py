"""
Test Configuration (conftest.py)
================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points the application at TEST_DATABASE_URL before anything from
       `noteful` is imported, then rebuilds and seeds the schema around
       every test.

Fixture Hierarchy:
    fresh_database: drop → create → seed, then drop + dispose afterwards
    ├── db_session:   AsyncSession on the test database
    └── test_client:  HTTPX AsyncClient routed straight into the app

    Tests that use neither fixture never touch the database.
"""

import os

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any noteful import; the engine binds DATABASE_URL at import
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///./noteful-test.db"
)
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from noteful.database import async_session_factory, create_all, dispose_engine, drop_all  # noqa: E402
from noteful.seed import seed_database  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Lifecycle
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def fresh_database():
    """
    Give every test the seed folders, tags and notes and nothing else.

    The engine is disposed afterwards so no pooled connection outlives the
    test's event loop.
    """
    await drop_all()
    await create_all()
    async with async_session_factory() as session:
        await seed_database(session)

    yield

    await drop_all()
    await dispose_engine()


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_session(fresh_database):
    """
    A session on the test database, for arranging data and checking what
    the API wrote.

    Usage:
        async def test_x(db_session):
            note = await Collection(db_session, Note).find_by_id(note_id)
    """
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(fresh_database):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from noteful.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
