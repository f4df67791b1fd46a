"""Invoice aggregate for the billing context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from billing.domain.events import InvoiceDrafted
from billing.domain.exceptions import EmptyInvoiceError, PaymentAmountMismatchError
from billing.domain.value_objects import ClientId, InvoiceId, InvoiceStatus, Money
from shared_kernel.lifecycle import LifecycleAggregate, StatusChanged, TransitionTable

if TYPE_CHECKING:
    from billing.domain.events import DomainEvent

INVOICE_TRANSITIONS = TransitionTable(
    InvoiceStatus,
    {
        InvoiceStatus.DRAFT: {InvoiceStatus.PENDING, InvoiceStatus.CANCELLED},
        InvoiceStatus.PENDING: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
        InvoiceStatus.PAID: set(),
        InvoiceStatus.CANCELLED: set(),
    },
)


@dataclass
class Invoice(LifecycleAggregate[InvoiceStatus]):
    """Invoice aggregate representing a bill sent to a client.

    Business rules:
    - An invoice starts as a draft and is issued once its total is positive
    - Payment must settle the outstanding balance exactly, in the invoice currency
    - Paid and cancelled invoices are final
    - Identity, client, number, and total never change after creation

    Event collection:
    - draft() records InvoiceDrafted
    - Every status change records StatusChanged
    - Events can be released via release_events() after persistence
    """

    aggregate_type: ClassVar[str] = "invoice"
    transitions: ClassVar[TransitionTable[InvoiceStatus]] = INVOICE_TRANSITIONS
    immutable_fields: ClassVar[frozenset[str]] = frozenset(
        {"client_id", "number", "total"}
    )

    id: InvoiceId
    client_id: ClientId
    number: str
    total: Money
    amount_paid: Money
    status: InvoiceStatus = InvoiceStatus.DRAFT
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    issued_at: datetime | None = None
    paid_at: datetime | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.amount_paid.currency != self.total.currency:
            raise ValueError(
                f"Invoice amounts must share a currency: total in "
                f"{self.total.currency}, paid in {self.amount_paid.currency}"
            )

    @classmethod
    def draft(
        cls,
        invoice_id: InvoiceId,
        client_id: ClientId,
        number: str,
        total: Money,
    ) -> Invoice:
        """Factory method for creating a draft invoice.

        Args:
            invoice_id: Identity reserved through the repository
            client_id: The client being invoiced
            number: Human-facing invoice number
            total: Invoice total

        Returns:
            A new DRAFT Invoice with an InvoiceDrafted event recorded

        Raises:
            ValueError: If the number is blank or the total is negative
        """
        number = number.strip()
        if not number:
            raise ValueError("Invoice number must not be empty")
        if total.amount < 0:
            raise ValueError("Invoice total must not be negative")

        invoice = cls(
            id=invoice_id,
            client_id=client_id,
            number=number,
            total=total,
            amount_paid=Money.zero(total.currency),
        )
        invoice._pending_events.append(
            InvoiceDrafted(
                invoice_id=invoice.id.value,
                client_id=client_id.value,
                number=number,
                total=str(total.amount),
                currency=total.currency,
                occurred_at=invoice.created_at,
            )
        )
        return invoice

    @property
    def outstanding_balance(self) -> Money:
        """Amount still owed on the invoice."""
        return self.total - self.amount_paid

    def issue(self) -> StatusChanged:
        """Issue the draft invoice to the client.

        Raises:
            EmptyInvoiceError: If the total is not positive
            InvalidTransitionError: If the invoice is not a draft
        """
        if not self.total.is_positive:
            raise EmptyInvoiceError(
                f"Invoice {self.id.value} cannot be issued with total {self.total}"
            )

        event = self.transition_to(InvoiceStatus.PENDING)
        self.issued_at = event.occurred_at
        return event

    def mark_as_paid(self, amount: Money) -> StatusChanged:
        """Record full payment of the outstanding balance.

        Args:
            amount: The amount received

        Raises:
            PaymentAmountMismatchError: If the currency differs or the amount
                does not equal the outstanding balance
            InvalidTransitionError: If the invoice is not pending
        """
        balance = self.outstanding_balance
        if amount.currency != balance.currency or amount.amount != balance.amount:
            raise PaymentAmountMismatchError(
                invoice_id=self.id.value,
                expected=str(balance),
                received=str(amount),
            )

        event = self.transition_to(
            InvoiceStatus.PAID,
            payload={"amount": str(amount.amount), "currency": amount.currency},
        )
        self.amount_paid = self.amount_paid + amount
        self.paid_at = event.occurred_at
        return event

    def cancel(self, reason: str) -> StatusChanged:
        """Cancel the invoice.

        Raises:
            ValueError: If the reason is blank
            InvalidTransitionError: If the invoice is already paid or cancelled
        """
        reason = reason.strip()
        if not reason:
            raise ValueError("A cancellation reason is required")

        return self.transition_to(InvoiceStatus.CANCELLED, payload={"reason": reason})
