"""Repository protocols (ports) for the billing bounded context.

Billing repositories work on the session of a bound tenant context, so
every read and write lands in the current tenant's database. They persist
aggregates but never release their events; the application service does
that once the transaction has committed.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from billing.domain.aggregates import Client, Invoice
from billing.domain.value_objects import ClientId, InvoiceId, TaxId


@runtime_checkable
class IInvoiceRepository(Protocol):
    """Repository for Invoice aggregate persistence."""

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        """Retrieve an invoice by its ID.

        Returns:
            The Invoice aggregate, or None if not found
        """
        ...

    async def save(self, invoice: Invoice) -> None:
        """Persist an invoice aggregate within the caller's transaction.

        Raises:
            PersistenceError: If the database rejects the write
        """
        ...

    def next_identity(self) -> InvoiceId:
        """Reserve a fresh identifier for a new invoice."""
        ...


@runtime_checkable
class IClientRepository(Protocol):
    """Repository for Client aggregate persistence."""

    async def get_by_id(self, client_id: ClientId) -> Client | None:
        """Retrieve a client by its ID.

        Returns:
            The Client aggregate, or None if not found
        """
        ...

    async def get_by_tax_id(self, tax_id: TaxId) -> Client | None:
        """Retrieve a client by its normalized tax ID."""
        ...

    async def save(self, client: Client) -> None:
        """Persist a client aggregate within the caller's transaction.

        Raises:
            DuplicateTaxIdError: If another client holds the tax ID
            PersistenceError: If the database rejects the write
        """
        ...

    def next_identity(self) -> ClientId:
        """Reserve a fresh identifier for a new client."""
        ...

    async def has_outstanding_invoices(self, client_id: ClientId) -> bool:
        """Check whether the client has issued invoices that are still unpaid."""
        ...
