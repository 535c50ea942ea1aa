"""Database session providers.

Provides the async read session used for tenant lookups, both as a FastAPI
dependency and as an async context manager for middleware, which runs
outside FastAPI's dependency injection.
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level engine and sessionmaker (created on first use)
_read_engine: AsyncEngine | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.

    Returns:
        Configured async engine for read operations
    """
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _read_engine is None:
                settings = get_database_settings()
                _read_engine = create_read_engine(settings)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    url=settings.connection_string,
                    pool_size=settings.pool_min_connections,
                )
    return _read_engine


@asynccontextmanager
async def open_read_session() -> AsyncIterator[AsyncSession]:
    """Open a read session for the enclosed block.

    Each caller gets its own session; sessions are never shared between
    requests.
    """
    get_read_engine()
    assert _read_sessionmaker is not None

    async with _read_sessionmaker() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a read-only session for queries (FastAPI dependency).

    Yields:
        AsyncSession for read-only database operations
    """
    async with open_read_session() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose the engine on application shutdown.

    Also resets the sessionmaker to allow reinitialization.
    """
    global _read_engine, _read_sessionmaker

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.engine_disposed()
        _read_engine = None
        _read_sessionmaker = None
