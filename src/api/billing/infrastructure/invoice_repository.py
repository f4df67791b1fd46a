"""PostgreSQL implementation of IInvoiceRepository.

Invoices live in the tenant's own database. The repository is given the
session of a bound tenant context and never releases aggregate events.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from billing.domain.aggregates import Invoice
from billing.domain.value_objects import ClientId, InvoiceId, InvoiceStatus, Money
from billing.infrastructure.models import InvoiceModel
from billing.infrastructure.observability import (
    DefaultInvoiceRepositoryProbe,
    InvoiceRepositoryProbe,
)
from billing.ports.repositories import IInvoiceRepository
from infrastructure.database.exceptions import PersistenceError


class InvoiceRepository(IInvoiceRepository):
    """Repository managing tenant PostgreSQL storage for Invoice aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: InvoiceRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a tenant database session.

        Args:
            session: AsyncSession from the bound tenant context
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultInvoiceRepositoryProbe()

    def next_identity(self) -> InvoiceId:
        return InvoiceId.generate()

    async def save(self, invoice: Invoice) -> None:
        """Upsert the invoice within the caller's transaction.

        Raises:
            PersistenceError: If the database rejects the write
        """
        try:
            stmt = select(InvoiceModel).where(InvoiceModel.id == invoice.id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model:
                model.status = invoice.status.value
                model.amount_paid = invoice.amount_paid.amount
                model.issued_at = invoice.issued_at
                model.paid_at = invoice.paid_at
            else:
                model = InvoiceModel(
                    id=invoice.id.value,
                    client_id=invoice.client_id.value,
                    number=invoice.number,
                    currency=invoice.total.currency,
                    total=invoice.total.amount,
                    amount_paid=invoice.amount_paid.amount,
                    status=invoice.status.value,
                    created_at=invoice.created_at,
                    issued_at=invoice.issued_at,
                    paid_at=invoice.paid_at,
                )
                self._session.add(model)

            await self._session.flush()

        except SQLAlchemyError as e:
            self._probe.persistence_failed(invoice.id.value, e)
            raise PersistenceError(
                f"Failed to save invoice {invoice.id.value}", aggregate_type="invoice"
            ) from e

        self._probe.invoice_saved(invoice.id.value, invoice.status.value)

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        """Fetch an invoice by ID from the tenant database."""
        stmt = select(InvoiceModel).where(InvoiceModel.id == invoice_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.invoice_retrieved(model.id)
        return self._to_aggregate(model)

    @staticmethod
    def _to_aggregate(model: InvoiceModel) -> Invoice:
        """Reconstitute an Invoice without recording any events."""
        return Invoice(
            id=InvoiceId(value=model.id),
            client_id=ClientId(value=model.client_id),
            number=model.number,
            total=Money(amount=model.total, currency=model.currency),
            amount_paid=Money(amount=model.amount_paid, currency=model.currency),
            status=InvoiceStatus(model.status),
            created_at=model.created_at,
            issued_at=model.issued_at,
            paid_at=model.paid_at,
        )
