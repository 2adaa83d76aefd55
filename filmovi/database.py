"""
Filmovi API — Database Pool and Unit of Work
=============================================

What:  Async SQLAlchemy engine, session factory and scoped transactions.
Why:   Centralizes all database connection logic in one place, and makes
       the connection pool an explicit object instead of ambient state.
How:   `Database` owns an async engine with a bounded connection pool and
       hands out sessions through `session_scope()`, which commits on
       success and rolls back on error.
Who:   Built by the application factory (or by tests) and passed to the
       movie repository through FastAPI's dependency injection.
When:  Engine is created with the app; sessions are created per operation.

Connection Pooling Strategy:
    pool_size=10:     Persistent connections (the service's historical limit)
    max_overflow=0:   No burst connections; the pool is strictly bounded
    pool_timeout=30:  Waiters give up after 30s instead of queueing forever
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Union

from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    The `filmovi` table itself is owned by the database administrator; the
    metadata registered here is only used to create it in tests and local
    development databases.
    """
    pass


class Database:
    """
    Resource manager for the connection pool.

    One instance per process. Everything that needs the database receives
    this object explicitly, so tests can substitute a SQLite-backed one.

    Example:
        database = Database(settings.sqlalchemy_url, **settings.engine_options)
        async with database.session_scope() as session:
            await session.execute(select(Movie))
    """

    def __init__(self, url: Union[str, URL], **engine_options: Any):
        # What: The async engine manages the connection pool and executes SQL
        self.engine = create_async_engine(url, **engine_options)

        # expire_on_commit=False: Prevents lazy-loading after commit, which
        # would fail outside the session context in async code
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session wrapped in a single transaction.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back the transaction and re-raises
            5. Always: closes the session (returns connection to pool)

        Everything executed inside one scope is atomic, so a write and the
        re-read that follows it observe the same state.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                # Roll back for ANY failure, including non-DB errors raised
                # by the caller between statements
                await session.rollback()
                raise
            finally:
                await session.close()

    async def ping(self) -> bool:
        """
        What:  Runs `SELECT 1` on a pooled connection.
        Who:   The /health route.
        Returns True when the database answered, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def create_tables(self) -> None:
        """
        Create all tables registered on Base.metadata if they are missing.

        Only for tests and throwaway local databases; production schemas are
        managed outside this service.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()
