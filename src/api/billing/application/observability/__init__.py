"""Domain-Oriented Observability for the billing application layer."""

from billing.application.observability.client_service_probe import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
)
from billing.application.observability.invoice_service_probe import (
    DefaultInvoiceServiceProbe,
    InvoiceServiceProbe,
)

__all__ = [
    "ClientServiceProbe",
    "DefaultClientServiceProbe",
    "DefaultInvoiceServiceProbe",
    "InvoiceServiceProbe",
]
