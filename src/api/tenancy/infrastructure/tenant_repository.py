"""PostgreSQL implementation of ITenantRepository.

This repository manages the tenant registry in the central database. It
never releases the aggregate's events: the application service does that
once the surrounding transaction has committed.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import PersistenceError
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import Subdomain, TenantId
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from tenancy.ports.exceptions import (
    DuplicateSubdomainError,
    TenantStorageReassignmentError,
)
from tenancy.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository managing central PostgreSQL storage for Tenant aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a central database session.

        Args:
            session: AsyncSession on the central database
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Upsert tenant metadata within the caller's transaction.

        Args:
            tenant: The Tenant aggregate to persist

        Raises:
            DuplicateSubdomainError: If another tenant uses the subdomain
            TenantStorageReassignmentError: If the stored database differs
            PersistenceError: If the database rejects the write
        """
        existing = await self.get_by_subdomain(tenant.subdomain)
        if existing and existing.id.value != tenant.id.value:
            self._probe.duplicate_subdomain(tenant.subdomain.value)
            raise DuplicateSubdomainError(
                f"Subdomain '{tenant.subdomain.value}' is already taken"
            )

        try:
            stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model:
                if model.database != tenant.database:
                    self._probe.storage_reassignment_rejected(
                        tenant.id.value, model.database, tenant.database
                    )
                    raise TenantStorageReassignmentError(
                        f"Tenant {tenant.id.value} is bound to database "
                        f"'{model.database}' and cannot be moved"
                    )
                model.name = tenant.name
                model.subdomain = tenant.subdomain.value
                model.is_active = tenant.is_active
            else:
                model = TenantModel(
                    id=tenant.id.value,
                    name=tenant.name,
                    subdomain=tenant.subdomain.value,
                    database=tenant.database,
                    is_active=tenant.is_active,
                )
                self._session.add(model)

            # Flush to surface constraint violations inside the caller's transaction
            await self._session.flush()

        except IntegrityError as e:
            if "subdomain" in str(e):
                self._probe.duplicate_subdomain(tenant.subdomain.value)
                raise DuplicateSubdomainError(
                    f"Subdomain '{tenant.subdomain.value}' is already taken"
                ) from e
            self._probe.persistence_failed(tenant.id.value, e)
            raise PersistenceError(
                f"Failed to save tenant {tenant.id.value}", aggregate_type="tenant"
            ) from e
        except SQLAlchemyError as e:
            self._probe.persistence_failed(tenant.id.value, e)
            raise PersistenceError(
                f"Failed to save tenant {tenant.id.value}", aggregate_type="tenant"
            ) from e

        self._probe.tenant_saved(tenant.id.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch a tenant by ID from the central database."""
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    async def get_by_subdomain(self, subdomain: Subdomain) -> Tenant | None:
        """Fetch a tenant by subdomain, active or not."""
        stmt = select(TenantModel).where(TenantModel.subdomain == subdomain.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.tenant_retrieved(model.id)
        return self._to_aggregate(model)

    async def list_all(self) -> list[Tenant]:
        """Fetch all tenants ordered by subdomain."""
        stmt = select(TenantModel).order_by(TenantModel.subdomain)
        result = await self._session.execute(stmt)
        tenants = [self._to_aggregate(model) for model in result.scalars().all()]

        self._probe.tenants_listed(len(tenants))
        return tenants

    @staticmethod
    def _to_aggregate(model: TenantModel) -> Tenant:
        """Reconstitute a Tenant without recording any events."""
        return Tenant(
            id=TenantId(value=model.id),
            name=model.name,
            subdomain=Subdomain(value=model.subdomain),
            database=model.database,
            is_active=model.is_active,
        )
