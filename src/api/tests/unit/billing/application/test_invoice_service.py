"""Unit tests for InvoiceService.

The orchestration order is the contract under test: mutate, save inside a
transaction, then release and dispatch. A failed save must leave events
unreleased and undispatched.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.exc import OperationalError

from billing.application.observability import InvoiceServiceProbe
from billing.application.services import InvoiceService
from billing.domain.aggregates import Client, Invoice
from billing.domain.events import InvoiceDrafted
from billing.domain.exceptions import (
    ClientNotFoundError,
    InvoiceNotFoundError,
    PaymentAmountMismatchError,
)
from billing.domain.value_objects import (
    ClientId,
    InvoiceId,
    InvoiceStatus,
    Money,
    TaxId,
)
from billing.ports.repositories import IClientRepository, IInvoiceRepository
from infrastructure.database.exceptions import PersistenceError
from shared_kernel.lifecycle import InvalidTransitionError, StatusChanged


@pytest.fixture
def mock_invoice_repo():
    repo = Mock(spec=IInvoiceRepository)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock()
    repo.next_identity = Mock(side_effect=InvoiceId.generate)
    return repo


@pytest.fixture
def mock_client_repo():
    repo = Mock(spec=IClientRepository)
    repo.get_by_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_probe():
    return Mock(spec=InvoiceServiceProbe)


@pytest.fixture
def invoice_service(
    mock_invoice_repo, mock_client_repo, mock_session, mock_dispatcher, mock_probe
):
    return InvoiceService(
        invoice_repository=mock_invoice_repo,
        client_repository=mock_client_repo,
        session=mock_session,
        dispatcher=mock_dispatcher,
        probe=mock_probe,
    )


def _stored_invoice(status: InvoiceStatus, total: str = "121.00") -> Invoice:
    return Invoice(
        id=InvoiceId.generate(),
        client_id=ClientId.generate(),
        number="2026-0001",
        total=Money.of(total),
        amount_paid=Money.zero(),
        status=status,
    )


class TestDraftInvoice:
    """Tests for InvoiceService.draft_invoice()."""

    @pytest.mark.asyncio
    async def test_drafts_for_existing_client(
        self, invoice_service, mock_invoice_repo, mock_client_repo, mock_dispatcher
    ):
        client_id = ClientId.generate()
        mock_client_repo.get_by_id.return_value = Client(
            id=client_id, name="Acme", tax_id=TaxId("B12345678")
        )

        invoice = await invoice_service.draft_invoice(
            client_id=client_id, number="2026-0001", total=Money.of("121")
        )

        assert invoice.status is InvoiceStatus.DRAFT
        mock_invoice_repo.save.assert_awaited_once_with(invoice)
        dispatched = mock_dispatcher.dispatch.await_args.args[0]
        assert isinstance(dispatched[0], InvoiceDrafted)

    @pytest.mark.asyncio
    async def test_unknown_client_raises(
        self, invoice_service, mock_invoice_repo, mock_dispatcher
    ):
        with pytest.raises(ClientNotFoundError) as exc_info:
            await invoice_service.draft_invoice(
                client_id=ClientId.generate(), number="1", total=Money.of("1")
            )

        assert exc_info.value.code == "client_not_found"
        mock_invoice_repo.save.assert_not_awaited()
        mock_dispatcher.dispatch.assert_not_awaited()


class TestPayInvoice:
    """Tests for InvoiceService.pay_invoice()."""

    @pytest.mark.asyncio
    async def test_saves_before_dispatching_status_change(
        self, invoice_service, mock_invoice_repo, mock_dispatcher
    ):
        invoice = _stored_invoice(InvoiceStatus.PENDING)
        mock_invoice_repo.get_by_id.return_value = invoice
        calls = []
        mock_invoice_repo.save.side_effect = lambda _: calls.append("save")
        mock_dispatcher.dispatch.side_effect = lambda _: calls.append("dispatch")

        result = await invoice_service.pay_invoice(invoice.id, Money.of("121.00"))

        assert calls == ["save", "dispatch"]
        assert result.status is InvoiceStatus.PAID
        (events,) = mock_dispatcher.dispatch.await_args.args
        assert len(events) == 1
        assert isinstance(events[0], StatusChanged)
        assert events[0].to_status == "paid"
        assert invoice.pending_events == ()

    @pytest.mark.asyncio
    async def test_save_failure_releases_and_dispatches_nothing(
        self, invoice_service, mock_invoice_repo, mock_dispatcher
    ):
        invoice = _stored_invoice(InvoiceStatus.PENDING)
        mock_invoice_repo.get_by_id.return_value = invoice
        mock_invoice_repo.save.side_effect = PersistenceError(
            "Failed to save invoice", aggregate_type="invoice"
        )

        with pytest.raises(PersistenceError):
            await invoice_service.pay_invoice(invoice.id, Money.of("121.00"))

        mock_dispatcher.dispatch.assert_not_awaited()
        assert len(invoice.pending_events) == 1

    @pytest.mark.asyncio
    async def test_commit_failure_releases_and_dispatches_nothing(
        self, invoice_service, mock_invoice_repo, mock_session, mock_dispatcher
    ):
        invoice = _stored_invoice(InvoiceStatus.PENDING)
        mock_invoice_repo.get_by_id.return_value = invoice
        mock_session.begin.return_value.__aexit__.side_effect = OperationalError(
            "COMMIT", {}, Exception("connection lost")
        )

        with pytest.raises(PersistenceError):
            await invoice_service.pay_invoice(invoice.id, Money.of("121.00"))

        mock_dispatcher.dispatch.assert_not_awaited()
        assert len(invoice.pending_events) == 1

    @pytest.mark.asyncio
    async def test_mismatch_does_not_save(
        self, invoice_service, mock_invoice_repo, mock_dispatcher
    ):
        invoice = _stored_invoice(InvoiceStatus.PENDING)
        mock_invoice_repo.get_by_id.return_value = invoice

        with pytest.raises(PaymentAmountMismatchError):
            await invoice_service.pay_invoice(invoice.id, Money.of("1.00"))

        mock_invoice_repo.save.assert_not_awaited()
        mock_dispatcher.dispatch.assert_not_awaited()


class TestIssueAndCancel:
    """Tests for issue_invoice() and cancel_invoice()."""

    @pytest.mark.asyncio
    async def test_issue_draft(self, invoice_service, mock_invoice_repo, mock_probe):
        invoice = _stored_invoice(InvoiceStatus.DRAFT)
        mock_invoice_repo.get_by_id.return_value = invoice

        result = await invoice_service.issue_invoice(invoice.id)

        assert result.status is InvoiceStatus.PENDING
        mock_probe.invoice_status_changed.assert_called_once_with(
            invoice_id=invoice.id.value, from_status="draft", to_status="pending"
        )

    @pytest.mark.asyncio
    async def test_cancel_paid_invoice_is_rejected(
        self, invoice_service, mock_invoice_repo, mock_dispatcher
    ):
        invoice = _stored_invoice(InvoiceStatus.PAID)
        mock_invoice_repo.get_by_id.return_value = invoice

        with pytest.raises(InvalidTransitionError):
            await invoice_service.cancel_invoice(invoice.id, "too late")

        mock_invoice_repo.save.assert_not_awaited()
        mock_dispatcher.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_invoice_raises(self, invoice_service, mock_probe):
        invoice_id = InvoiceId.generate()

        with pytest.raises(InvoiceNotFoundError):
            await invoice_service.cancel_invoice(invoice_id, "reason")

        mock_probe.invoice_not_found.assert_called_once_with(invoice_id=invoice_id.value)
