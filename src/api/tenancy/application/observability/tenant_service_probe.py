"""Protocol for tenant application service observability.

Defines the interface for domain probes that capture application-level
domain events for tenant provisioning and activation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant application service operations."""

    def tenant_provisioned(self, tenant_id: str, subdomain: str, database: str) -> None:
        """Record that a tenant was provisioned."""
        ...

    def tenant_deactivated(self, tenant_id: str) -> None:
        """Record that a tenant was deactivated."""
        ...

    def tenant_reactivated(self, tenant_id: str) -> None:
        """Record that a tenant was reactivated."""
        ...

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that a tenant was not found."""
        ...

    def duplicate_subdomain(self, subdomain: str) -> None:
        """Record that a duplicate subdomain was detected."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def tenant_provisioned(self, tenant_id: str, subdomain: str, database: str) -> None:
        """Record that a tenant was provisioned."""
        self._logger.info(
            "tenant_provisioned",
            tenant_id=tenant_id,
            subdomain=subdomain,
            database=database,
            **self._get_context_kwargs(),
        )

    def tenant_deactivated(self, tenant_id: str) -> None:
        """Record that a tenant was deactivated."""
        self._logger.info(
            "tenant_deactivated",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_reactivated(self, tenant_id: str) -> None:
        """Record that a tenant was reactivated."""
        self._logger.info(
            "tenant_reactivated",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: str) -> None:
        """Record that a tenant was not found."""
        self._logger.debug(
            "tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_subdomain(self, subdomain: str) -> None:
        """Record that a duplicate subdomain was detected."""
        self._logger.warning(
            "duplicate_tenant_subdomain",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )
