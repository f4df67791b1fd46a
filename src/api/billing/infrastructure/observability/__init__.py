"""Domain-Oriented Observability for billing infrastructure."""

from billing.infrastructure.observability.repository_probes import (
    ClientRepositoryProbe,
    DefaultClientRepositoryProbe,
    DefaultInvoiceRepositoryProbe,
    InvoiceRepositoryProbe,
)

__all__ = [
    "ClientRepositoryProbe",
    "DefaultClientRepositoryProbe",
    "DefaultInvoiceRepositoryProbe",
    "InvoiceRepositoryProbe",
]
