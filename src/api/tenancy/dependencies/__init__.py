"""FastAPI dependencies for the tenancy bounded context."""

from tenancy.dependencies.tenant import (
    get_tenant_context_binder,
    get_tenant_repository,
    get_tenant_resolver,
    get_tenant_service,
)
from tenancy.dependencies.tenant_context import (
    get_tenant_context,
    resolve_request_tenant,
)

__all__ = [
    "get_tenant_context",
    "get_tenant_context_binder",
    "get_tenant_repository",
    "get_tenant_resolver",
    "get_tenant_service",
    "resolve_request_tenant",
]
