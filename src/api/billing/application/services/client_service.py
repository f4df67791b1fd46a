"""Client application service for the billing bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from billing.application.observability import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
)
from billing.domain.aggregates import Client
from billing.domain.exceptions import ClientNotFoundError
from billing.domain.value_objects import ClientId, TaxId
from billing.ports.exceptions import DuplicateTaxIdError
from billing.ports.repositories import IClientRepository
from infrastructure.database.transactions import persistence_transaction
from shared_kernel.events import IEventDispatcher
from shared_kernel.lifecycle import StatusChanged


class ClientService:
    """Application service for client management.

    Mutate, save inside a transaction, then release and dispatch events.
    """

    def __init__(
        self,
        client_repository: IClientRepository,
        session: AsyncSession,
        dispatcher: IEventDispatcher,
        probe: ClientServiceProbe | None = None,
    ):
        self._client_repository = client_repository
        self._session = session
        self._dispatcher = dispatcher
        self._probe = probe or DefaultClientServiceProbe()

    async def register_client(
        self,
        name: str,
        tax_id: str,
        email: str | None = None,
    ) -> Client:
        """Register a new client.

        Raises:
            ValueError: If the name is blank or the tax ID is malformed
            DuplicateTaxIdError: If the tax ID is already registered
            PersistenceError: If the client cannot be stored
        """
        client = Client.register(
            client_id=self._client_repository.next_identity(),
            name=name,
            tax_id=TaxId(value=tax_id),
            email=email,
        )

        try:
            async with persistence_transaction(self._session, "client"):
                await self._client_repository.save(client)
        except DuplicateTaxIdError:
            self._probe.duplicate_tax_id(client.tax_id.value)
            raise

        self._probe.client_registered(
            client_id=client.id.value, tax_id=client.tax_id.value
        )
        await self._dispatcher.dispatch(client.release_events())
        return client

    async def suspend_client(self, client_id: ClientId, reason: str) -> Client:
        """Suspend an active client.

        Raises:
            ClientNotFoundError: If the client does not exist
            ValueError: If the reason is blank
            InvalidTransitionError: If the client is not active
        """
        async with persistence_transaction(self._session, "client"):
            client = await self._load(client_id)
            event = client.suspend(reason)
            await self._client_repository.save(client)

        return await self._publish(client, event)

    async def reactivate_client(self, client_id: ClientId) -> Client:
        """Reactivate a suspended client."""
        async with persistence_transaction(self._session, "client"):
            client = await self._load(client_id)
            event = client.reactivate()
            await self._client_repository.save(client)

        return await self._publish(client, event)

    async def archive_client(self, client_id: ClientId) -> Client:
        """Archive a client that owes nothing.

        Raises:
            ClientNotFoundError: If the client does not exist
            ClientHasOutstandingInvoicesError: If any issued invoice is unpaid
            InvalidTransitionError: If the client is already archived
        """
        async with persistence_transaction(self._session, "client"):
            client = await self._load(client_id)
            outstanding = await self._client_repository.has_outstanding_invoices(
                client_id
            )
            event = client.archive(has_outstanding_invoices=outstanding)
            await self._client_repository.save(client)

        return await self._publish(client, event)

    async def _load(self, client_id: ClientId) -> Client:
        client = await self._client_repository.get_by_id(client_id)
        if client is None:
            self._probe.client_not_found(client_id=client_id.value)
            raise ClientNotFoundError(f"Client {client_id.value} not found")
        return client

    async def _publish(self, client: Client, event: StatusChanged) -> Client:
        self._probe.client_status_changed(
            client_id=client.id.value,
            from_status=event.from_status,
            to_status=event.to_status,
        )
        await self._dispatcher.dispatch(client.release_events())
        return client
