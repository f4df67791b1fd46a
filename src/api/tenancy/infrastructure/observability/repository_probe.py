"""Domain probe for tenant repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant registry persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def duplicate_subdomain(self, subdomain: str) -> None:
        """Record that a duplicate subdomain was detected."""
        ...

    def storage_reassignment_rejected(
        self, tenant_id: str, stored: str, requested: str
    ) -> None:
        """Record that a save tried to repoint a tenant's database."""
        ...

    def persistence_failed(self, tenant_id: str, error: Exception) -> None:
        """Record that the database rejected a tenant write."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str) -> None:
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int) -> None:
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_subdomain(self, subdomain: str) -> None:
        self._logger.warning(
            "duplicate_tenant_subdomain",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def storage_reassignment_rejected(
        self, tenant_id: str, stored: str, requested: str
    ) -> None:
        self._logger.error(
            "tenant_storage_reassignment_rejected",
            tenant_id=tenant_id,
            stored_database=stored,
            requested_database=requested,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, tenant_id: str, error: Exception) -> None:
        self._logger.error(
            "tenant_persistence_failed",
            tenant_id=tenant_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
