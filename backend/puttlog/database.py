"""
PuttLog Backend - Database Session Management
==============================================

What:  Async SQLAlchemy storage client, declarative base, and FastAPI dependency.
How:   `Database` owns an async engine and a session factory. The app factory
       constructs one instance, keeps it on `app.state.database`, and disposes it
       on shutdown. Each request gets its own session through `get_db_session`,
       which commits on success and rolls back on error.
Who:   Route handlers (via Depends), the lifespan handler, tests.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size / max_overflow / pre_ping from settings,
    connections recycled hourly.
    SQLite (aiosqlite): driver defaults; every new connection runs
    PRAGMA foreign_keys=ON so the putts -> sessions cascade is enforced.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from puttlog.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate
    and `Database.create_all()` uses to create missing tables.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ships with foreign key enforcement off for each new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine for a database URL.

    Pool options are only passed for server databases; SQLite pools
    reject pool_size/max_overflow.
    """
    config = config or default_settings
    is_sqlite = make_url(database_url).get_backend_name() == "sqlite"

    engine_kwargs = {
        # SQL echo only in DEBUG; it is noisy
        "echo": config.log_level == "DEBUG",
    }
    if not is_sqlite:
        engine_kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )

    engine = create_async_engine(database_url, **engine_kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


class Database:
    """
    Process-wide storage client.

    Attributes:
        url:             Connection URL the engine was built from
        engine:          AsyncEngine managing the connection pool
        session_factory: Produces one AsyncSession per unit of work

    expire_on_commit=False keeps ORM attributes readable after commit, so
    responses can be built from objects after the transaction closes.
    """

    def __init__(self, database_url: str, config: Optional[Settings] = None):
        self.url = database_url
        self.engine = build_engine(database_url, config)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        config = config or default_settings
        return cls(config.database_url, config)

    async def create_all(self) -> None:
        """
        What:  Creates any missing tables and indexes from the ORM metadata.
        When:  Startup, when DB_AUTO_CREATE is enabled; test fixtures.
        """
        # Register the models with Base.metadata before creating tables
        from puttlog.models import session as _models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Lightweight connectivity probe (SELECT 1) used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Closes all pooled connections. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the app's Database
        2. Yields it to the route handler
        3. On success: commits (the whole request is one transaction)
        4. On error: rolls back, so a failed request leaves no partial writes
        5. Always: closes the session (returns the connection to the pool)

    Example usage in a route:
        @router.get("/sessions")
        async def list_sessions(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
