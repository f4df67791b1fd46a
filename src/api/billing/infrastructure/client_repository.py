"""PostgreSQL implementation of IClientRepository.

Clients live in the tenant's own database. Tax IDs are unique per tenant;
the same company can be a client of several tenants.
"""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing.domain.aggregates import Client
from billing.domain.value_objects import ClientId, ClientStatus, InvoiceStatus, TaxId
from billing.infrastructure.models import ClientModel, InvoiceModel
from billing.infrastructure.observability import (
    ClientRepositoryProbe,
    DefaultClientRepositoryProbe,
)
from billing.ports.exceptions import DuplicateTaxIdError
from billing.ports.repositories import IClientRepository
from infrastructure.database.exceptions import PersistenceError


class ClientRepository(IClientRepository):
    """Repository managing tenant PostgreSQL storage for Client aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ClientRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a tenant database session.

        Args:
            session: AsyncSession from the bound tenant context
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultClientRepositoryProbe()

    def next_identity(self) -> ClientId:
        return ClientId.generate()

    async def save(self, client: Client) -> None:
        """Upsert the client within the caller's transaction.

        Raises:
            DuplicateTaxIdError: If another client holds the tax ID
            PersistenceError: If the database rejects the write
        """
        existing = await self.get_by_tax_id(client.tax_id)
        if existing and existing.id.value != client.id.value:
            self._probe.duplicate_tax_id(client.tax_id.value)
            raise DuplicateTaxIdError(
                f"Tax ID '{client.tax_id.value}' is already registered"
            )

        try:
            stmt = select(ClientModel).where(ClientModel.id == client.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model:
                model.name = client.name
                model.email = client.email
                model.status = client.status.value
            else:
                model = ClientModel(
                    id=client.id.value,
                    name=client.name,
                    tax_id=client.tax_id.value,
                    email=client.email,
                    status=client.status.value,
                )
                self._session.add(model)

            await self._session.flush()

        except IntegrityError as e:
            if "tax_id" in str(e):
                self._probe.duplicate_tax_id(client.tax_id.value)
                raise DuplicateTaxIdError(
                    f"Tax ID '{client.tax_id.value}' is already registered"
                ) from e
            self._probe.persistence_failed(client.id.value, e)
            raise PersistenceError(
                f"Failed to save client {client.id.value}", aggregate_type="client"
            ) from e
        except SQLAlchemyError as e:
            self._probe.persistence_failed(client.id.value, e)
            raise PersistenceError(
                f"Failed to save client {client.id.value}", aggregate_type="client"
            ) from e

        self._probe.client_saved(client.id.value, client.status.value)

    async def get_by_id(self, client_id: ClientId) -> Client | None:
        """Fetch a client by ID from the tenant database."""
        stmt = select(ClientModel).where(ClientModel.id == client_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.client_retrieved(model.id)
        return self._to_aggregate(model)

    async def get_by_tax_id(self, tax_id: TaxId) -> Client | None:
        """Fetch a client by normalized tax ID."""
        stmt = select(ClientModel).where(ClientModel.tax_id == tax_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.client_retrieved(model.id)
        return self._to_aggregate(model)

    async def has_outstanding_invoices(self, client_id: ClientId) -> bool:
        """Check for issued invoices of the client that are not yet paid."""
        stmt = select(
            exists().where(
                InvoiceModel.client_id == client_id.value,
                InvoiceModel.status == InvoiceStatus.PENDING.value,
            )
        )
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    @staticmethod
    def _to_aggregate(model: ClientModel) -> Client:
        """Reconstitute a Client without recording any events."""
        return Client(
            id=ClientId(value=model.id),
            name=model.name,
            tax_id=TaxId(value=model.tax_id),
            email=model.email,
            status=ClientStatus(model.status),
        )
