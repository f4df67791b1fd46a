"""Per-tenant engine registry.

Each tenant owns a dedicated database. The registry lazily creates one
async engine (and sessionmaker) per database name and reuses it for the
life of the process, so binding a tenant to a request only costs a session
checkout from that tenant's pool.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_tenant_engine
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings, get_database_settings

EngineFactory = Callable[[DatabaseSettings, str], AsyncEngine]


class TenantEngineRegistry:
    """Thread-safe cache of async engines keyed by tenant database name.

    Uses double-check locking for engine initialization, so concurrent
    first requests for the same tenant share one engine.
    """

    def __init__(
        self,
        settings: DatabaseSettings | None = None,
        engine_factory: EngineFactory = create_tenant_engine,
        probe: ConnectionProbe | None = None,
    ) -> None:
        self._settings = settings or get_database_settings()
        self._engine_factory = engine_factory
        self._probe = probe or DefaultConnectionProbe()
        self._engines: dict[str, AsyncEngine] = {}
        self._sessionmakers: dict[str, async_sessionmaker[AsyncSession]] = {}
        self._lock = threading.Lock()

    @property
    def databases(self) -> frozenset[str]:
        """Names of databases that currently have an engine."""
        return frozenset(self._engines)

    def sessionmaker_for(self, database: str) -> async_sessionmaker[AsyncSession]:
        """Get (creating on first use) the sessionmaker for a tenant database.

        Args:
            database: Name of the tenant's database

        Returns:
            Sessionmaker producing sessions bound to that database

        Raises:
            DatabaseConnectionError: If the engine cannot be created
        """
        maker = self._sessionmakers.get(database)
        if maker is not None:
            return maker

        with self._lock:
            # Double-check after acquiring lock
            maker = self._sessionmakers.get(database)
            if maker is None:
                try:
                    engine = self._engine_factory(self._settings, database)
                except (SQLAlchemyError, ImportError) as e:
                    self._probe.engine_creation_failed(database, e)
                    raise DatabaseConnectionError(
                        f"Cannot create engine for database '{database}'"
                    ) from e

                maker = async_sessionmaker(
                    engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                self._engines[database] = engine
                self._sessionmakers[database] = maker
                self._probe.engine_created(database)
        return maker

    def open_session(self, database: str) -> AsyncSession:
        """Open a new session on a tenant database.

        The session does not auto-commit. Callers manage transactions with
        ``async with session.begin()`` and must close the session.
        """
        return self.sessionmaker_for(database)()

    async def dispose_all(self) -> None:
        """Dispose every tenant engine.

        Should be called on application shutdown.
        """
        with self._lock:
            engines = list(self._engines.values())
            self._engines.clear()
            self._sessionmakers.clear()

        for engine in engines:
            await engine.dispose()
        self._probe.engines_disposed(len(engines))
