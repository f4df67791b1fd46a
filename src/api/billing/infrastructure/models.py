"""SQLAlchemy ORM models for the billing tables.

These tables are created in every tenant's dedicated database. Monetary
amounts are stored as NUMERIC(12, 2) next to a single currency column per
invoice.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import TenantBase, TimestampMixin


class ClientModel(TenantBase, TimestampMixin):
    """ORM model for clients table.

    Note: Tax IDs are unique within a tenant's database.
    """

    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tax_id: Mapped[str] = mapped_column(
        String(15), nullable=False, unique=True, index=True
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ClientModel(id={self.id}, tax_id={self.tax_id}, status={self.status})>"


class InvoiceModel(TenantBase, TimestampMixin):
    """ORM model for invoices table."""

    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    client_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("clients.id"), nullable=False, index=True
    )
    number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    amount_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<InvoiceModel(id={self.id}, number={self.number}, "
            f"status={self.status})>"
        )
