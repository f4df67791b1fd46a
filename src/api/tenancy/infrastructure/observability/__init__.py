"""Domain-Oriented Observability for tenancy infrastructure."""

from tenancy.infrastructure.observability.context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.infrastructure.observability.repository_probe import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "DefaultTenantContextProbe",
    "DefaultTenantRepositoryProbe",
    "TenantContextProbe",
    "TenantRepositoryProbe",
]
