"""Domain probe for tenant resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving a tenant from the
request host.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolution operations."""

    def tenant_resolved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a host resolved to an active tenant."""
        ...

    def malformed_host(self, host: str) -> None:
        """Record that the host carried no usable subdomain."""
        ...

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant uses the subdomain."""
        ...

    def tenant_inactive(self, tenant_id: str, subdomain: str) -> None:
        """Record that the matched tenant is deactivated."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def tenant_resolved(self, tenant_id: str, subdomain: str) -> None:
        """Record that a host resolved to an active tenant."""
        self._logger.debug(
            "tenant_resolved",
            tenant_id=tenant_id,
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def malformed_host(self, host: str) -> None:
        """Record that the host carried no usable subdomain."""
        self._logger.warning(
            "tenant_host_malformed",
            host=host,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, subdomain: str) -> None:
        """Record that no tenant uses the subdomain."""
        self._logger.warning(
            "tenant_not_found",
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )

    def tenant_inactive(self, tenant_id: str, subdomain: str) -> None:
        """Record that the matched tenant is deactivated."""
        self._logger.warning(
            "tenant_inactive",
            tenant_id=tenant_id,
            subdomain=subdomain,
            **self._get_context_kwargs(),
        )
