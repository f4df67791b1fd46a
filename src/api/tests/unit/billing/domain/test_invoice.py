"""Unit tests for the Invoice aggregate."""

import pytest

from billing.domain.aggregates import INVOICE_TRANSITIONS, Invoice
from billing.domain.events import InvoiceDrafted
from billing.domain.exceptions import EmptyInvoiceError, PaymentAmountMismatchError
from billing.domain.value_objects import ClientId, InvoiceId, InvoiceStatus, Money
from shared_kernel.lifecycle import InvalidTransitionError, StatusChanged


def _draft(total: str = "121.00", currency: str = "EUR") -> Invoice:
    invoice = Invoice.draft(
        invoice_id=InvoiceId.generate(),
        client_id=ClientId.generate(),
        number="2026-0001",
        total=Money.of(total, currency),
    )
    invoice.release_events()
    return invoice


def _pending(total: str = "121.00") -> Invoice:
    invoice = _draft(total)
    invoice.issue()
    invoice.release_events()
    return invoice


class TestTransitionTable:
    """Tests for the invoice transition table."""

    def test_matches_invoice_lifecycle(self):
        assert INVOICE_TRANSITIONS.allowed_from(InvoiceStatus.DRAFT) == {
            InvoiceStatus.PENDING,
            InvoiceStatus.CANCELLED,
        }
        assert INVOICE_TRANSITIONS.allowed_from(InvoiceStatus.PENDING) == {
            InvoiceStatus.PAID,
            InvoiceStatus.CANCELLED,
        }
        assert INVOICE_TRANSITIONS.terminal_states == {
            InvoiceStatus.PAID,
            InvoiceStatus.CANCELLED,
        }


class TestDraft:
    """Tests for Invoice.draft()."""

    def test_records_drafted_event(self):
        invoice = Invoice.draft(
            invoice_id=InvoiceId.generate(),
            client_id=ClientId.generate(),
            number=" 2026-0001 ",
            total=Money.of("50"),
        )

        events = invoice.release_events()

        assert invoice.status is InvoiceStatus.DRAFT
        assert invoice.number == "2026-0001"
        assert invoice.amount_paid == Money.zero("EUR")
        assert len(events) == 1
        assert isinstance(events[0], InvoiceDrafted)
        assert events[0].total == "50.00"

    def test_rejects_blank_number(self):
        with pytest.raises(ValueError):
            Invoice.draft(
                invoice_id=InvoiceId.generate(),
                client_id=ClientId.generate(),
                number="  ",
                total=Money.of("1"),
            )

    def test_rejects_negative_total(self):
        with pytest.raises(ValueError):
            Invoice.draft(
                invoice_id=InvoiceId.generate(),
                client_id=ClientId.generate(),
                number="1",
                total=Money.of("-1"),
            )

    def test_rejects_status_outside_enum(self):
        with pytest.raises(ValueError):
            Invoice(
                id=InvoiceId.generate(),
                client_id=ClientId.generate(),
                number="1",
                total=Money.of("1"),
                amount_paid=Money.zero(),
                status="overdue",
            )

    def test_total_cannot_be_reassigned(self):
        invoice = _draft()
        with pytest.raises(AttributeError):
            invoice.total = Money.of("1")

    def test_status_cannot_be_assigned(self):
        invoice = _draft()
        with pytest.raises(AttributeError):
            invoice.status = InvoiceStatus.PAID


class TestIssue:
    """Tests for Invoice.issue()."""

    def test_moves_to_pending_and_sets_issued_at(self):
        invoice = _draft()

        event = invoice.issue()

        assert invoice.status is InvoiceStatus.PENDING
        assert invoice.issued_at == event.occurred_at
        assert invoice.release_events() == [event]

    def test_zero_total_raises_empty_invoice(self):
        invoice = _draft(total="0")

        with pytest.raises(EmptyInvoiceError) as exc_info:
            invoice.issue()

        assert exc_info.value.code == "empty_invoice"
        assert invoice.status is InvoiceStatus.DRAFT
        assert invoice.pending_events == ()

    def test_issue_twice_raises_invalid_transition(self):
        invoice = _pending()
        with pytest.raises(InvalidTransitionError):
            invoice.issue()

    def test_pending_cannot_return_to_draft(self):
        invoice = _draft()
        issued = invoice.issue()

        with pytest.raises(InvalidTransitionError) as exc_info:
            invoice.transition_to(InvoiceStatus.DRAFT)

        assert exc_info.value.aggregate_id == invoice.aggregate_id
        assert exc_info.value.from_status == "pending"
        assert exc_info.value.to_status == "draft"
        assert invoice.status is InvoiceStatus.PENDING
        assert invoice.pending_events == (issued,)


class TestMarkAsPaid:
    """Tests for Invoice.mark_as_paid()."""

    def test_pending_invoice_paid_in_full(self):
        invoice = _pending("121.00")

        event = invoice.mark_as_paid(Money.of("121.00"))

        assert invoice.status is InvoiceStatus.PAID
        assert invoice.outstanding_balance == Money.zero()
        assert invoice.paid_at == event.occurred_at
        events = invoice.release_events()
        assert events == [event]
        assert isinstance(event, StatusChanged)
        assert event.from_status == "pending"
        assert event.to_status == "paid"
        assert dict(event.payload) == {"amount": "121.00", "currency": "EUR"}

    def test_partial_payment_raises_mismatch(self):
        invoice = _pending("121.00")

        with pytest.raises(PaymentAmountMismatchError) as exc_info:
            invoice.mark_as_paid(Money.of("100.00"))

        assert exc_info.value.code == "payment_amount_mismatch"
        assert invoice.status is InvoiceStatus.PENDING
        assert invoice.pending_events == ()

    def test_currency_mismatch_raises_before_transition(self):
        invoice = _pending("121.00")

        with pytest.raises(PaymentAmountMismatchError):
            invoice.mark_as_paid(Money.of("121.00", "USD"))

        assert invoice.status is InvoiceStatus.PENDING

    def test_paying_a_draft_is_invalid(self):
        invoice = _draft("121.00")

        with pytest.raises(InvalidTransitionError):
            invoice.mark_as_paid(Money.of("121.00"))

        assert invoice.amount_paid == Money.zero()

    def test_paid_invoice_cannot_be_paid_again(self):
        invoice = _pending("10")
        invoice.mark_as_paid(Money.of("10"))
        invoice.release_events()

        with pytest.raises(PaymentAmountMismatchError):
            invoice.mark_as_paid(Money.of("10"))
        with pytest.raises(InvalidTransitionError):
            invoice.mark_as_paid(Money.zero())


class TestCancel:
    """Tests for Invoice.cancel()."""

    def test_cancel_pending_records_reason(self):
        invoice = _pending()

        event = invoice.cancel("client dispute")

        assert invoice.status is InvoiceStatus.CANCELLED
        assert event.payload["reason"] == "client dispute"

    def test_cancel_draft(self):
        invoice = _draft()
        invoice.cancel("duplicate")
        assert invoice.status is InvoiceStatus.CANCELLED

    def test_cancel_requires_reason(self):
        invoice = _pending()

        with pytest.raises(ValueError):
            invoice.cancel("   ")

        assert invoice.status is InvoiceStatus.PENDING

    def test_cancel_paid_invoice_is_invalid(self):
        invoice = _pending("10")
        invoice.mark_as_paid(Money.of("10"))
        invoice.release_events()

        with pytest.raises(InvalidTransitionError) as exc_info:
            invoice.cancel("too late")

        assert exc_info.value.from_status == "paid"
        assert exc_info.value.to_status == "cancelled"
        assert invoice.status is InvoiceStatus.PAID
        assert invoice.release_events() == []

    def test_cancelled_invoice_is_terminal(self):
        invoice = _draft()
        invoice.cancel("mistake")
        assert invoice.is_terminal is True
