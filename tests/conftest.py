"""
Filmovi API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── database:          Database on a throwaway SQLite file (real SQL)
    ├── repository:        MovieRepository bound to `database`
    ├── broken_database:   Database stand-in failing with an OperationalError
    ├── refused_database:  Database stand-in failing with a raw ConnectionRefusedError
    ├── crashing_database: Database stand-in failing with a RuntimeError
    ├── test_client:       HTTPX AsyncClient against create_app(database)
    └── sample_movie_data: Request body for a valid movie
"""

import os
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
# Prevents the module-level app in filmovi.main from pointing at a real server
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from filmovi.database import Database  # noqa: E402
from filmovi.repositories.movie_repository import MovieRepository  # noqa: E402


class BrokenDatabase:
    """
    Stands in for a Database whose server is unreachable.

    session_scope() raises `error` before yielding a session, and ping()
    reports the database as down. The default is the OperationalError
    SQLAlchemy raises for a failed statement; asyncpg lets a refused
    connection through as a bare ConnectionRefusedError.
    """

    def __init__(self, error=None):
        self.error = error or OperationalError(
            "SELECT filmovi.id FROM filmovi", {}, ConnectionRefusedError("connection refused")
        )
        self.disposed = False

    @asynccontextmanager
    async def session_scope(self):
        raise self.error
        yield  # pragma: no cover

    async def ping(self) -> bool:
        return False

    async def dispose(self) -> None:
        self.disposed = True


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a Database backed by a fresh SQLite file with the filmovi table.

    What:    Real engine, real SQL, same unit of work as production.
    Why:     Repository behaviour (row counts, server defaults, bound
             parameters) is only meaningful against a real database.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'filmovi.db'}")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def repository(database):
    """MovieRepository bound to the test database."""
    return MovieRepository(database)


@pytest.fixture
def broken_database():
    """A Database stand-in that fails every storage operation."""
    return BrokenDatabase()


@pytest.fixture
def refused_database():
    """A Database stand-in whose connection attempts are refused by the OS."""
    return BrokenDatabase(ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 5432)"))


@pytest.fixture
def crashing_database():
    """A Database stand-in that fails with a non-storage error."""
    return BrokenDatabase(RuntimeError("unexpected"))


@pytest.fixture
def sample_movie_data():
    """Request body for a valid movie."""
    return {"naslov": "Inception", "godina": 2010, "zanr": "Sci-Fi"}


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to a fresh app instance.
    How:     Uses ASGITransport to route requests directly to the app,
             which serves from the `database` fixture.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/filmovi")
            assert response.status_code == 200
    """
    from filmovi.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
