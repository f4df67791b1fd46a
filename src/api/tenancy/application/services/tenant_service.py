"""Tenant application service for the tenancy bounded context.

Handles tenant provisioning and soft activation changes against the
central database.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.transactions import persistence_transaction
from shared_kernel.events import IEventDispatcher
from tenancy.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantNotRegisteredError
from tenancy.domain.value_objects import Subdomain, TenantId
from tenancy.ports.exceptions import DuplicateSubdomainError
from tenancy.ports.repositories import ITenantRepository


class TenantService:
    """Application service for tenant management.

    Every write follows the same order: mutate the aggregate, save it inside
    a transaction, and only after commit release and dispatch its events.
    """

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        session: AsyncSession,
        dispatcher: IEventDispatcher,
        probe: TenantServiceProbe | None = None,
    ):
        """Initialize TenantService with dependencies.

        Args:
            tenant_repository: Repository for tenant persistence
            session: Central database session for transaction management
            dispatcher: Receives released events after commit
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._session = session
        self._dispatcher = dispatcher
        self._probe = probe or DefaultTenantServiceProbe()

    async def provision_tenant(
        self,
        name: str,
        subdomain: str,
        database: str | None = None,
    ) -> Tenant:
        """Register a new tenant.

        Args:
            name: Display name of the tenant
            subdomain: Subdomain the tenant will be served under
            database: Dedicated database name; derived from the subdomain if omitted

        Returns:
            The provisioned Tenant

        Raises:
            ValueError: If the subdomain or database name is invalid
            DuplicateSubdomainError: If the subdomain is already taken
            PersistenceError: If the tenant cannot be stored
        """
        tenant = Tenant.provision(
            name=name,
            subdomain=Subdomain.from_string(subdomain),
            database=database,
        )

        try:
            async with persistence_transaction(self._session, "tenant"):
                await self._tenant_repository.save(tenant)
        except DuplicateSubdomainError:
            self._probe.duplicate_subdomain(subdomain)
            raise

        self._probe.tenant_provisioned(
            tenant_id=tenant.id.value,
            subdomain=tenant.subdomain.value,
            database=tenant.database,
        )
        await self._dispatcher.dispatch(tenant.release_events())
        return tenant

    async def deactivate_tenant(self, tenant_id: TenantId) -> Tenant:
        """Soft-deactivate a tenant.

        Raises:
            TenantNotRegisteredError: If the tenant does not exist
            TenantStateError: If the tenant is already inactive
        """
        async with persistence_transaction(self._session, "tenant"):
            tenant = await self._load(tenant_id)
            tenant.deactivate()
            await self._tenant_repository.save(tenant)

        self._probe.tenant_deactivated(tenant_id=tenant_id.value)
        await self._dispatcher.dispatch(tenant.release_events())
        return tenant

    async def reactivate_tenant(self, tenant_id: TenantId) -> Tenant:
        """Reactivate a deactivated tenant.

        Raises:
            TenantNotRegisteredError: If the tenant does not exist
            TenantStateError: If the tenant is already active
        """
        async with persistence_transaction(self._session, "tenant"):
            tenant = await self._load(tenant_id)
            tenant.reactivate()
            await self._tenant_repository.save(tenant)

        self._probe.tenant_reactivated(tenant_id=tenant_id.value)
        await self._dispatcher.dispatch(tenant.release_events())
        return tenant

    async def _load(self, tenant_id: TenantId) -> Tenant:
        tenant = await self._tenant_repository.get_by_id(tenant_id)
        if tenant is None:
            self._probe.tenant_not_found(tenant_id=tenant_id.value)
            raise TenantNotRegisteredError(f"Tenant {tenant_id.value} not found")
        return tenant
