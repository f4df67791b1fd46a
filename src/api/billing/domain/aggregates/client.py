"""Client aggregate for the billing context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from billing.domain.events import ClientRegistered
from billing.domain.exceptions import ClientHasOutstandingInvoicesError
from billing.domain.value_objects import ClientId, ClientStatus, TaxId
from shared_kernel.lifecycle import LifecycleAggregate, StatusChanged, TransitionTable

if TYPE_CHECKING:
    from billing.domain.events import DomainEvent

CLIENT_TRANSITIONS = TransitionTable(
    ClientStatus,
    {
        ClientStatus.ACTIVE: {ClientStatus.SUSPENDED, ClientStatus.ARCHIVED},
        ClientStatus.SUSPENDED: {ClientStatus.ACTIVE, ClientStatus.ARCHIVED},
        ClientStatus.ARCHIVED: set(),
    },
)


@dataclass
class Client(LifecycleAggregate[ClientStatus]):
    """Client aggregate representing a customer of the tenant.

    Business rules:
    - The tax ID identifies the client fiscally and never changes
    - Suspended clients can be reactivated; archived clients cannot
    - A client with outstanding invoices cannot be archived
    """

    aggregate_type: ClassVar[str] = "client"
    transitions: ClassVar[TransitionTable[ClientStatus]] = CLIENT_TRANSITIONS
    immutable_fields: ClassVar[frozenset[str]] = frozenset({"tax_id"})

    id: ClientId
    name: str
    tax_id: TaxId
    email: str | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def register(
        cls,
        client_id: ClientId,
        name: str,
        tax_id: TaxId,
        email: str | None = None,
    ) -> Client:
        """Factory method for registering a new client.

        Returns:
            A new ACTIVE Client with a ClientRegistered event recorded

        Raises:
            ValueError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValueError("Client name must not be empty")

        client = cls(id=client_id, name=name, tax_id=tax_id, email=email)
        client._pending_events.append(
            ClientRegistered(
                client_id=client_id.value,
                name=name,
                tax_id=tax_id.value,
                email=email,
                occurred_at=datetime.now(UTC),
            )
        )
        return client

    def suspend(self, reason: str) -> StatusChanged:
        """Suspend an active client.

        Raises:
            ValueError: If the reason is blank
            InvalidTransitionError: If the client is not active
        """
        reason = reason.strip()
        if not reason:
            raise ValueError("A suspension reason is required")

        return self.transition_to(ClientStatus.SUSPENDED, payload={"reason": reason})

    def reactivate(self) -> StatusChanged:
        """Reactivate a suspended client."""
        return self.transition_to(ClientStatus.ACTIVE)

    def archive(self, has_outstanding_invoices: bool) -> StatusChanged:
        """Archive the client permanently.

        Args:
            has_outstanding_invoices: Whether the client still owes on any
                issued invoice; looked up by the caller

        Raises:
            ClientHasOutstandingInvoicesError: If invoices are outstanding
            InvalidTransitionError: If the client is already archived
        """
        if has_outstanding_invoices:
            raise ClientHasOutstandingInvoicesError(
                f"Client {self.id.value} has outstanding invoices"
            )

        return self.transition_to(ClientStatus.ARCHIVED)
