"""Application services for the billing bounded context."""

from billing.application.services.client_service import ClientService
from billing.application.services.invoice_service import InvoiceService

__all__ = [
    "ClientService",
    "InvoiceService",
]
