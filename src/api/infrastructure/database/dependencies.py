"""Database dependency injection for FastAPI.

Provides the central session (tenant registry lookups) and the shared
per-tenant engine registry, with lazy, thread-safe initialization.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_central_engine
from infrastructure.database.tenant_engines import TenantEngineRegistry
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultConnectionProbe()

# Module-level instances (created on first use)
_central_engine: AsyncEngine | None = None
_central_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_tenant_engines: TenantEngineRegistry | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_central_engine() -> AsyncEngine:
    """Get the central database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine for the central database
    """
    global _central_engine, _central_sessionmaker
    if _central_engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _central_engine is None:
                settings = get_database_settings()
                _central_engine = create_central_engine(settings)
                _central_sessionmaker = async_sessionmaker(
                    _central_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(settings.database)
    return _central_engine


def get_tenant_engines() -> TenantEngineRegistry:
    """Get the process-wide tenant engine registry (singleton)."""
    global _tenant_engines
    if _tenant_engines is None:
        with _engine_lock:
            if _tenant_engines is None:
                _tenant_engines = TenantEngineRegistry(
                    settings=get_database_settings(),
                    probe=_probe,
                )
    return _tenant_engines


async def get_central_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on the central database (FastAPI dependency).

    The session is configured to NOT auto-commit. Callers must explicitly
    manage transactions using `async with session.begin()`.

    Yields:
        AsyncSession for tenant registry operations
    """
    get_central_engine()
    assert _central_sessionmaker is not None

    async with _central_sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Close the central engine and every tenant engine.

    Should be called on application shutdown to properly cleanup connections.
    Also resets module state to allow reinitialization.
    """
    global _central_engine, _central_sessionmaker, _tenant_engines

    if _central_engine is not None:
        await _central_engine.dispose()
        _probe.pool_closed()
        _central_engine = None
        _central_sessionmaker = None

    if _tenant_engines is not None:
        await _tenant_engines.dispose_all()
        _tenant_engines = None
