"""Unit tests for the Client aggregate."""

import pytest

from billing.domain.aggregates import Client
from billing.domain.events import ClientRegistered
from billing.domain.exceptions import ClientHasOutstandingInvoicesError
from billing.domain.value_objects import ClientId, ClientStatus, TaxId
from shared_kernel.lifecycle import InvalidTransitionError


def _client(status: ClientStatus = ClientStatus.ACTIVE) -> Client:
    return Client(
        id=ClientId.generate(),
        name="Fontanería López",
        tax_id=TaxId("B12345678"),
        status=status,
    )


class TestRegister:
    """Tests for Client.register()."""

    def test_records_registered_event(self):
        client = Client.register(
            client_id=ClientId.generate(),
            name="  Fontanería López ",
            tax_id=TaxId("b12345678"),
            email="admin@lopez.es",
        )

        events = client.release_events()

        assert client.status is ClientStatus.ACTIVE
        assert client.name == "Fontanería López"
        assert len(events) == 1
        assert isinstance(events[0], ClientRegistered)
        assert events[0].tax_id == "B12345678"

    def test_rejects_blank_name(self):
        with pytest.raises(ValueError):
            Client.register(client_id=ClientId.generate(), name="", tax_id=TaxId("B12345678"))

    def test_tax_id_is_immutable(self):
        client = _client()
        with pytest.raises(AttributeError):
            client.tax_id = TaxId("A87654321")

    def test_name_can_change(self):
        client = _client()
        client.name = "López S.L."
        assert client.name == "López S.L."


class TestSuspendAndReactivate:
    """Tests for suspend() and reactivate()."""

    def test_suspend_active_client(self):
        client = _client()

        event = client.suspend("unpaid invoices")

        assert client.status is ClientStatus.SUSPENDED
        assert event.payload == {"reason": "unpaid invoices"}

    def test_suspend_requires_reason(self):
        with pytest.raises(ValueError):
            _client().suspend("")

    def test_suspend_suspended_client_is_invalid(self):
        client = _client(ClientStatus.SUSPENDED)
        with pytest.raises(InvalidTransitionError):
            client.suspend("again")

    def test_reactivate_suspended_client(self):
        client = _client(ClientStatus.SUSPENDED)

        event = client.reactivate()

        assert client.status is ClientStatus.ACTIVE
        assert event.from_status == "suspended"
        assert event.to_status == "active"

    def test_reactivate_active_client_is_invalid(self):
        with pytest.raises(InvalidTransitionError):
            _client().reactivate()


class TestArchive:
    """Tests for archive()."""

    def test_archive_without_outstanding_invoices(self):
        client = _client()

        client.archive(has_outstanding_invoices=False)

        assert client.status is ClientStatus.ARCHIVED
        assert client.is_terminal is True

    def test_archive_with_outstanding_invoices_raises(self):
        client = _client()

        with pytest.raises(ClientHasOutstandingInvoicesError) as exc_info:
            client.archive(has_outstanding_invoices=True)

        assert exc_info.value.code == "client_has_outstanding_invoices"
        assert client.status is ClientStatus.ACTIVE
        assert client.pending_events == ()

    def test_archived_client_cannot_be_reactivated(self):
        client = _client(ClientStatus.ARCHIVED)

        with pytest.raises(InvalidTransitionError):
            client.reactivate()

    def test_events_accumulate_in_order(self):
        client = _client()
        client.suspend("late payments")
        client.reactivate()
        client.archive(has_outstanding_invoices=False)

        events = client.release_events()

        assert [(e.from_status, e.to_status) for e in events] == [
            ("active", "suspended"),
            ("suspended", "active"),
            ("active", "archived"),
        ]
