"""
Database Configuration

Two stores are configured: the privileged one used by every write path and
a public one for read-only browsing/report endpoints (it may point at the
same database). Both are built once in the application lifespan and kept on
``app.state``; request handlers receive sessions through ``get_db`` and
``get_public_db``.

SECURITY:
- SQLAlchemy echo disabled in production to prevent credential leakage
- Connection string never logged
"""

import logging
import time
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

SLOW_QUERY_THRESHOLD_MS = 500


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


# Slow query logging
def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info["query_start_time"] = time.monotonic()


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    start = conn.info.get("query_start_time")
    if start is None:
        return
    duration_ms = (time.monotonic() - start) * 1000
    if duration_ms >= SLOW_QUERY_THRESHOLD_MS:
        param_count = len(parameters) if parameters else 0
        truncated = statement[:200] + ("..." if len(statement) > 200 else "")
        logger.warning(
            "Slow query (%.0fms, %d params): %s", duration_ms, param_count, truncated
        )


class Database:
    """Engine plus session factory for one connection URL."""

    def __init__(self, url: str, echo: bool = False, engine: AsyncEngine | None = None):
        if engine is None:
            engine_kwargs = {"echo": echo, "future": True, "pool_pre_ping": True}
            if not url.startswith("sqlite"):
                # Connection pool settings for production stability
                engine_kwargs.update(pool_size=20, max_overflow=10, pool_recycle=3600)
            engine = create_async_engine(url, **engine_kwargs)
        self.engine = engine
        self.session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        event.listen(self.engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
        event.listen(self.engine.sync_engine, "after_cursor_execute", _after_cursor_execute)

    async def create_all(self) -> None:
        """Create tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def session(self) -> AsyncIterator[AsyncSession]:
        session = self.session_maker()
        try:
            yield session
        finally:
            await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency to get a session on the privileged database.

    Note: The services commit their own units of work.
    This dependency only provides the session and handles cleanup.
    """
    database: Database = request.app.state.database
    async for session in database.session():
        yield session


async def get_public_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency to get a session on the public (read-only) database."""
    database: Database = request.app.state.public_database
    async for session in database.session():
        yield session
