"""Infrastructure layer for the tenancy bounded context."""

from tenancy.infrastructure.context import (
    BoundTenantContext,
    TenantContextBinder,
    current_tenant_context,
    has_tenant_context,
)
from tenancy.infrastructure.tenant_repository import TenantRepository

__all__ = [
    "BoundTenantContext",
    "TenantContextBinder",
    "TenantRepository",
    "current_tenant_context",
    "has_tenant_context",
]
