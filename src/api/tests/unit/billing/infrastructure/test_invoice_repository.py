"""Unit tests for InvoiceRepository with a mocked session."""

from decimal import Decimal
from unittest.mock import MagicMock, Mock

import pytest
from sqlalchemy.exc import OperationalError

from billing.domain.aggregates import Invoice
from billing.domain.value_objects import ClientId, InvoiceId, InvoiceStatus, Money
from billing.infrastructure.invoice_repository import InvoiceRepository
from billing.infrastructure.models import InvoiceModel
from billing.infrastructure.observability import InvoiceRepositoryProbe
from billing.ports.repositories import IInvoiceRepository
from infrastructure.database.exceptions import PersistenceError


@pytest.fixture
def mock_probe():
    return Mock(spec=InvoiceRepositoryProbe)


@pytest.fixture
def repository(mock_session, mock_probe):
    return InvoiceRepository(session=mock_session, probe=mock_probe)


def _result(model):
    result = MagicMock()
    result.scalar_one_or_none.return_value = model
    return result


def _draft() -> Invoice:
    return Invoice.draft(
        invoice_id=InvoiceId.generate(),
        client_id=ClientId.generate(),
        number="2026-0007",
        total=Money.of("250.00"),
    )


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IInvoiceRepository)


class TestSave:
    """Tests for InvoiceRepository.save()."""

    @pytest.mark.asyncio
    async def test_adds_new_invoice(self, repository, mock_session, mock_probe):
        invoice = _draft()
        mock_session.execute.return_value = _result(None)

        await repository.save(invoice)

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, InvoiceModel)
        assert added.total == Decimal("250.00")
        assert added.currency == "EUR"
        assert added.status == "draft"
        mock_session.flush.assert_awaited_once()
        mock_probe.invoice_saved.assert_called_once_with(invoice.id.value, "draft")

    @pytest.mark.asyncio
    async def test_updates_mutable_columns_of_existing_row(
        self, repository, mock_session
    ):
        invoice = _draft()
        invoice.release_events()
        invoice.issue()
        model = MagicMock(spec=InvoiceModel)
        mock_session.execute.return_value = _result(model)

        await repository.save(invoice)

        assert model.status == "pending"
        assert model.issued_at == invoice.issued_at
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_leaves_events_pending(self, repository, mock_session):
        invoice = _draft()
        mock_session.execute.return_value = _result(None)

        await repository.save(invoice)

        assert len(invoice.pending_events) == 1

    @pytest.mark.asyncio
    async def test_database_error_becomes_persistence_error(
        self, repository, mock_session, mock_probe
    ):
        invoice = _draft()
        mock_session.execute.return_value = _result(None)
        mock_session.flush.side_effect = OperationalError(
            "INSERT", {}, Exception("disk full")
        )

        with pytest.raises(PersistenceError) as exc_info:
            await repository.save(invoice)

        assert exc_info.value.aggregate_type == "invoice"
        mock_probe.persistence_failed.assert_called_once()
        mock_probe.invoice_saved.assert_not_called()


class TestGetById:
    """Tests for InvoiceRepository.get_by_id()."""

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, repository, mock_session):
        mock_session.execute.return_value = _result(None)

        assert await repository.get_by_id(_draft().id) is None

    @pytest.mark.asyncio
    async def test_reconstitutes_without_events(self, repository, mock_session):
        invoice = _draft()
        model = InvoiceModel(
            id=invoice.id.value,
            client_id=invoice.client_id.value,
            number=invoice.number,
            currency="EUR",
            total=Decimal("250.00"),
            amount_paid=Decimal("0.00"),
            status="pending",
            created_at=invoice.created_at,
            issued_at=invoice.created_at,
            paid_at=None,
        )
        mock_session.execute.return_value = _result(model)

        loaded = await repository.get_by_id(invoice.id)

        assert loaded.id == invoice.id
        assert loaded.status is InvoiceStatus.PENDING
        assert loaded.total == Money.of("250.00")
        assert loaded.pending_events == ()
