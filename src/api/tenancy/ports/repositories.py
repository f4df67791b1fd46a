"""Repository protocols (ports) for the tenancy bounded context.

The tenant repository reads and writes the central database. It is the only
repository that works without a bound tenant context.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import Subdomain, TenantId


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence."""

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant aggregate.

        Creates a new tenant or updates an existing one. Does not release
        the tenant's pending events; the caller does that after commit.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateSubdomainError: If another tenant uses the subdomain
            TenantStorageReassignmentError: If the stored database differs
            PersistenceError: If the database rejects the write
        """
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID.

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def get_by_subdomain(self, subdomain: Subdomain) -> Tenant | None:
        """Retrieve a tenant by subdomain, whether active or not.

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def list_all(self) -> list[Tenant]:
        """List all tenants in the system."""
        ...
