"""Protocol for client application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClientServiceProbe(Protocol):
    """Domain probe for client application service operations."""

    def client_registered(self, client_id: str, tax_id: str) -> None:
        """Record that a client was registered."""
        ...

    def client_status_changed(
        self, client_id: str, from_status: str, to_status: str
    ) -> None:
        """Record that a client moved along its lifecycle."""
        ...

    def client_not_found(self, client_id: str) -> None:
        """Record that a client was not found."""
        ...

    def duplicate_tax_id(self, tax_id: str) -> None:
        """Record that a registration reused an existing tax ID."""
        ...

    def with_context(self, context: ObservationContext) -> ClientServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientServiceProbe:
    """Default implementation of ClientServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultClientServiceProbe:
        return DefaultClientServiceProbe(logger=self._logger, context=context)

    def client_registered(self, client_id: str, tax_id: str) -> None:
        self._logger.info(
            "client_registered",
            client_id=client_id,
            tax_id=tax_id,
            **self._get_context_kwargs(),
        )

    def client_status_changed(
        self, client_id: str, from_status: str, to_status: str
    ) -> None:
        self._logger.info(
            "client_status_changed",
            client_id=client_id,
            from_status=from_status,
            to_status=to_status,
            **self._get_context_kwargs(),
        )

    def client_not_found(self, client_id: str) -> None:
        self._logger.warning(
            "client_not_found",
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def duplicate_tax_id(self, tax_id: str) -> None:
        self._logger.warning(
            "client_duplicate_tax_id",
            tax_id=tax_id,
            **self._get_context_kwargs(),
        )
