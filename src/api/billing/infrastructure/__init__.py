"""Infrastructure layer for the billing bounded context."""

from billing.infrastructure.client_repository import ClientRepository
from billing.infrastructure.invoice_repository import InvoiceRepository

__all__ = [
    "ClientRepository",
    "InvoiceRepository",
]
