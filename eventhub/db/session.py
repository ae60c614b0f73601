"""
Database handle and the request-scoped session dependency.

A single ``Database`` is built when the application starts, stored on
``app.state.database`` and disposed on shutdown. Request handlers receive a
session from it through ``get_db``; nothing in the codebase creates an engine
at import time.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from eventhub.core.config import Settings
from eventhub.core.logging import get_logger
from eventhub.db.base import Base

logger = get_logger(__name__)


def _configure_sqlite_connection(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Stop the driver from emitting its own deferred BEGIN; see _begin_immediate
    dbapi_connection.isolation_level = None


def _begin_immediate(conn) -> None:
    # Take the write lock when the transaction starts, not at its first write,
    # so a count read inside the transaction cannot go stale before the insert
    conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """Owns the async engine (connection pool) and the session factory."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 1800,
    ):
        engine_options = {"echo": echo, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )

        self.engine: AsyncEngine = create_async_engine(url, **engine_options)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _configure_sqlite_connection)
            event.listen(self.engine.sync_engine, "begin", _begin_immediate)

        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    async def create_all(self) -> None:
        # Models must be imported so their tables are registered on Base.metadata
        import eventhub.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("database_ping_failed", error=str(e))
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from the application's database."""
    database: Database = request.app.state.database
    async with database.sessionmaker() as session:
        yield session
