"""Invoice application service for the billing bounded context.

Orchestrates invoice lifecycle operations against the bound tenant's
database.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from billing.application.observability import (
    DefaultInvoiceServiceProbe,
    InvoiceServiceProbe,
)
from billing.domain.aggregates import Invoice
from billing.domain.exceptions import ClientNotFoundError, InvoiceNotFoundError
from billing.domain.value_objects import ClientId, InvoiceId, Money
from billing.ports.repositories import IClientRepository, IInvoiceRepository
from infrastructure.database.transactions import persistence_transaction
from shared_kernel.events import IEventDispatcher
from shared_kernel.lifecycle import StatusChanged


class InvoiceService:
    """Application service for invoice management.

    Every write follows the same order: load and mutate the aggregate, save
    it inside a transaction, and only after commit release its events to
    the dispatcher. A failed save or commit leaves the events unreleased.
    """

    def __init__(
        self,
        invoice_repository: IInvoiceRepository,
        client_repository: IClientRepository,
        session: AsyncSession,
        dispatcher: IEventDispatcher,
        probe: InvoiceServiceProbe | None = None,
    ):
        """Initialize InvoiceService with dependencies.

        Args:
            invoice_repository: Repository for invoice persistence
            client_repository: Repository used to check the invoiced client
            session: Tenant database session for transaction management
            dispatcher: Receives released events after commit
            probe: Optional domain probe for observability
        """
        self._invoice_repository = invoice_repository
        self._client_repository = client_repository
        self._session = session
        self._dispatcher = dispatcher
        self._probe = probe or DefaultInvoiceServiceProbe()

    async def draft_invoice(
        self,
        client_id: ClientId,
        number: str,
        total: Money,
    ) -> Invoice:
        """Draft a new invoice for an existing client.

        Raises:
            ClientNotFoundError: If the client does not exist
            ValueError: If the number is blank or the total is negative
            PersistenceError: If the invoice cannot be stored
        """
        async with persistence_transaction(self._session, "invoice"):
            client = await self._client_repository.get_by_id(client_id)
            if client is None:
                self._probe.client_not_found(client_id=client_id.value)
                raise ClientNotFoundError(f"Client {client_id.value} not found")

            invoice = Invoice.draft(
                invoice_id=self._invoice_repository.next_identity(),
                client_id=client_id,
                number=number,
                total=total,
            )
            await self._invoice_repository.save(invoice)

        self._probe.invoice_drafted(
            invoice_id=invoice.id.value,
            client_id=client_id.value,
            number=invoice.number,
        )
        await self._dispatcher.dispatch(invoice.release_events())
        return invoice

    async def issue_invoice(self, invoice_id: InvoiceId) -> Invoice:
        """Issue a draft invoice.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
            EmptyInvoiceError: If the total is not positive
            InvalidTransitionError: If the invoice is not a draft
        """
        async with persistence_transaction(self._session, "invoice"):
            invoice = await self._load(invoice_id)
            event = invoice.issue()
            await self._invoice_repository.save(invoice)

        return await self._publish(invoice, event)

    async def pay_invoice(self, invoice_id: InvoiceId, amount: Money) -> Invoice:
        """Record full payment of a pending invoice.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
            PaymentAmountMismatchError: If the amount does not settle the balance
            InvalidTransitionError: If the invoice is not pending
        """
        async with persistence_transaction(self._session, "invoice"):
            invoice = await self._load(invoice_id)
            event = invoice.mark_as_paid(amount)
            await self._invoice_repository.save(invoice)

        return await self._publish(invoice, event)

    async def cancel_invoice(self, invoice_id: InvoiceId, reason: str) -> Invoice:
        """Cancel a draft or pending invoice.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
            ValueError: If the reason is blank
            InvalidTransitionError: If the invoice is already paid or cancelled
        """
        async with persistence_transaction(self._session, "invoice"):
            invoice = await self._load(invoice_id)
            event = invoice.cancel(reason)
            await self._invoice_repository.save(invoice)

        return await self._publish(invoice, event)

    async def get_invoice(self, invoice_id: InvoiceId) -> Invoice:
        """Fetch an invoice.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
        """
        return await self._load(invoice_id)

    async def _load(self, invoice_id: InvoiceId) -> Invoice:
        invoice = await self._invoice_repository.get_by_id(invoice_id)
        if invoice is None:
            self._probe.invoice_not_found(invoice_id=invoice_id.value)
            raise InvoiceNotFoundError(f"Invoice {invoice_id.value} not found")
        return invoice

    async def _publish(self, invoice: Invoice, event: StatusChanged) -> Invoice:
        self._probe.invoice_status_changed(
            invoice_id=invoice.id.value,
            from_status=event.from_status,
            to_status=event.to_status,
        )
        await self._dispatcher.dispatch(invoice.release_events())
        return invoice
