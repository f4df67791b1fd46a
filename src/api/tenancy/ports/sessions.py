"""Port for opening sessions on tenant databases."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession


@runtime_checkable
class TenantSessionFactory(Protocol):
    """Opens sessions on a tenant's dedicated database.

    Implemented by infrastructure.database.tenant_engines.TenantEngineRegistry.
    """

    def open_session(self, database: str) -> AsyncSession:
        """Open a new, unconnected session on the named database."""
        ...
