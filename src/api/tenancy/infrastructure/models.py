"""SQLAlchemy ORM model for the tenants table.

Stores the tenant registry in the central database. Every request reads
this table to decide which tenant database it may use.
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import CentralBase, TimestampMixin


class TenantModel(CentralBase, TimestampMixin):
    """ORM model for tenants table.

    Note: Subdomains are globally unique across the entire system, and so
    are database names, since no two tenants may share a store.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdomain: Mapped[str] = mapped_column(
        String(63), nullable=False, unique=True, index=True
    )
    database: Mapped[str] = mapped_column(String(63), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TenantModel(id={self.id}, subdomain={self.subdomain}, "
            f"is_active={self.is_active})>"
        )
