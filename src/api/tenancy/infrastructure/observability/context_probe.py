"""Domain probe for tenant context binding.

Following Domain-Oriented Observability patterns, this probe captures
the lifecycle of a request-scoped tenant binding: bind, release, and
rejected nesting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context binding operations."""

    def context_bound(self, tenant_id: str, database: str, nested: bool) -> None:
        """Record that a tenant's database became the active context."""
        ...

    def context_released(self, tenant_id: str, failed: bool) -> None:
        """Record that a binding was released, on success or error."""
        ...

    def nested_binding_rejected(self, bound_tenant_id: str, requested_tenant_id: str) -> None:
        """Record that a bind was refused because another is active."""
        ...

    def connection_failed(self, tenant_id: str, database: str, error: Exception) -> None:
        """Record that the tenant database could not be reached."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def context_bound(self, tenant_id: str, database: str, nested: bool) -> None:
        self._logger.debug(
            "tenant_context_bound",
            tenant_id=tenant_id,
            database=database,
            nested=nested,
            **self._get_context_kwargs(),
        )

    def context_released(self, tenant_id: str, failed: bool) -> None:
        self._logger.debug(
            "tenant_context_released",
            tenant_id=tenant_id,
            failed=failed,
            **self._get_context_kwargs(),
        )

    def nested_binding_rejected(self, bound_tenant_id: str, requested_tenant_id: str) -> None:
        self._logger.error(
            "tenant_context_nested_binding_rejected",
            bound_tenant_id=bound_tenant_id,
            requested_tenant_id=requested_tenant_id,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, tenant_id: str, database: str, error: Exception) -> None:
        self._logger.error(
            "tenant_database_connection_failed",
            tenant_id=tenant_id,
            database=database,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
