"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database engine observability.

    This probe captures domain-significant events related to the central
    engine and the per-tenant engine registry without exposing logging
    implementation details.
    """

    def engine_created(self, database: str) -> None:
        """Record that an engine was created for a database."""
        ...

    def engine_creation_failed(self, database: str, error: Exception) -> None:
        """Record that an engine could not be created."""
        ...

    def engines_disposed(self, count: int) -> None:
        """Record that tenant engines were disposed."""
        ...

    def pool_closed(self) -> None:
        """Record that the central connection pool was closed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(self, database: str) -> None:
        """Record that an engine was created for a database."""
        self._logger.info(
            "database_engine_created",
            database=database,
            **self._get_context_kwargs(),
        )

    def engine_creation_failed(self, database: str, error: Exception) -> None:
        """Record that an engine could not be created."""
        self._logger.error(
            "database_engine_creation_failed",
            database=database,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def engines_disposed(self, count: int) -> None:
        """Record that tenant engines were disposed."""
        self._logger.info(
            "tenant_engines_disposed",
            count=count,
            **self._get_context_kwargs(),
        )

    def pool_closed(self) -> None:
        """Record that the central connection pool was closed."""
        self._logger.info(
            "connection_pool_closed",
            **self._get_context_kwargs(),
        )
