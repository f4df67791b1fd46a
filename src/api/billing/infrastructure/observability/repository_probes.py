"""Domain probes for billing repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to invoice and client persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InvoiceRepositoryProbe(Protocol):
    """Domain probe for invoice repository operations."""

    def invoice_saved(self, invoice_id: str, status: str) -> None:
        """Record that an invoice was successfully saved."""
        ...

    def invoice_retrieved(self, invoice_id: str) -> None:
        """Record that an invoice was retrieved."""
        ...

    def persistence_failed(self, invoice_id: str, error: Exception) -> None:
        """Record that the database rejected an invoice write."""
        ...

    def with_context(self, context: ObservationContext) -> InvoiceRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class ClientRepositoryProbe(Protocol):
    """Domain probe for client repository operations."""

    def client_saved(self, client_id: str, status: str) -> None:
        """Record that a client was successfully saved."""
        ...

    def client_retrieved(self, client_id: str) -> None:
        """Record that a client was retrieved."""
        ...

    def duplicate_tax_id(self, tax_id: str) -> None:
        """Record that a duplicate tax ID was detected."""
        ...

    def persistence_failed(self, client_id: str, error: Exception) -> None:
        """Record that the database rejected a client write."""
        ...

    def with_context(self, context: ObservationContext) -> ClientRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInvoiceRepositoryProbe:
    """Default implementation of InvoiceRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultInvoiceRepositoryProbe:
        return DefaultInvoiceRepositoryProbe(logger=self._logger, context=context)

    def invoice_saved(self, invoice_id: str, status: str) -> None:
        self._logger.info(
            "invoice_saved",
            invoice_id=invoice_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def invoice_retrieved(self, invoice_id: str) -> None:
        self._logger.debug(
            "invoice_retrieved",
            invoice_id=invoice_id,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, invoice_id: str, error: Exception) -> None:
        self._logger.error(
            "invoice_persistence_failed",
            invoice_id=invoice_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )


class DefaultClientRepositoryProbe:
    """Default implementation of ClientRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultClientRepositoryProbe:
        return DefaultClientRepositoryProbe(logger=self._logger, context=context)

    def client_saved(self, client_id: str, status: str) -> None:
        self._logger.info(
            "client_saved",
            client_id=client_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def client_retrieved(self, client_id: str) -> None:
        self._logger.debug(
            "client_retrieved",
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def duplicate_tax_id(self, tax_id: str) -> None:
        self._logger.warning(
            "duplicate_tax_id_detected",
            tax_id=tax_id,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, client_id: str, error: Exception) -> None:
        self._logger.error(
            "client_persistence_failed",
            client_id=client_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
