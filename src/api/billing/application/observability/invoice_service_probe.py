"""Protocol for invoice application service observability.

Defines the interface for domain probes that capture application-level
domain events along an invoice's lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InvoiceServiceProbe(Protocol):
    """Domain probe for invoice application service operations."""

    def invoice_drafted(self, invoice_id: str, client_id: str, number: str) -> None:
        """Record that an invoice was drafted."""
        ...

    def invoice_status_changed(
        self, invoice_id: str, from_status: str, to_status: str
    ) -> None:
        """Record that an invoice moved along its lifecycle."""
        ...

    def invoice_not_found(self, invoice_id: str) -> None:
        """Record that an invoice was not found."""
        ...

    def client_not_found(self, client_id: str) -> None:
        """Record that the client to invoice was not found."""
        ...

    def with_context(self, context: ObservationContext) -> InvoiceServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInvoiceServiceProbe:
    """Default implementation of InvoiceServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultInvoiceServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultInvoiceServiceProbe(logger=self._logger, context=context)

    def invoice_drafted(self, invoice_id: str, client_id: str, number: str) -> None:
        self._logger.info(
            "invoice_drafted",
            invoice_id=invoice_id,
            client_id=client_id,
            number=number,
            **self._get_context_kwargs(),
        )

    def invoice_status_changed(
        self, invoice_id: str, from_status: str, to_status: str
    ) -> None:
        self._logger.info(
            "invoice_status_changed",
            invoice_id=invoice_id,
            from_status=from_status,
            to_status=to_status,
            **self._get_context_kwargs(),
        )

    def invoice_not_found(self, invoice_id: str) -> None:
        self._logger.warning(
            "invoice_not_found",
            invoice_id=invoice_id,
            **self._get_context_kwargs(),
        )

    def client_not_found(self, client_id: str) -> None:
        self._logger.warning(
            "invoice_client_not_found",
            client_id=client_id,
            **self._get_context_kwargs(),
        )
