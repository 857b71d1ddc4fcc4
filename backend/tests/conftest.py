"""
PuttLog Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets a fresh SQLite database file (aiosqlite) in pytest's
       tmp_path, so tests exercise the real SQL, FK cascade and constraints.

Fixture Hierarchy (all function-scoped):
    ├── database:        Database on a temp SQLite file, tables created
    ├── db_session:      AsyncSession on that database
    ├── app:             FastAPI app wired to the temp database
    ├── test_client:     HTTPX AsyncClient talking to the app in-process
    ├── alice / bob:     Identity headers for two different owners
    └── mock_db_session: AsyncMock session for failure-path tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any puttlog imports so the module-level app never
# points at a developer database
_TEST_DATA_DIR = tempfile.mkdtemp(prefix="puttlog_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DATA_DIR}/putter.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from puttlog.config import settings  # noqa: E402
from puttlog.database import Database  # noqa: E402
from puttlog.main import create_app  # noqa: E402


@pytest_asyncio.fixture
async def database(tmp_path):
    """A Database on a fresh SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path}/putter.db", settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    An AsyncSession on the test database.

    Services only flush; tests that need data visible to another session
    call `await db_session.commit()` themselves.
    """
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def app(database):
    return create_app(config=settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight to the app (no server, no lifespan).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def alice():
    return {"x-user-id": "user_alice"}


@pytest.fixture
def bob():
    return {"x-user-id": "user_bob"}


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.side_effect = RuntimeError("connection lost")
        await session_service.list_sessions(mock_db_session, "user_alice")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
