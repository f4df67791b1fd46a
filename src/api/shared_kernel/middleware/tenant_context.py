"""Tenant context value object for resolved tenant identification.

This module contains the pure value object that represents a resolved
tenant context. It is framework-agnostic and contains no business logic,
making it safe for the shared kernel.

The actual resolution logic (host parsing, tenant lookup, database
binding) lives in the tenancy bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    This is a shared kernel value object used across bounded contexts
    to carry the resolved tenant identity and its storage reference.

    Attributes:
        tenant_id: The tenant identifier as a string.
        subdomain: The subdomain the tenant was resolved from.
        database: Name of the tenant's dedicated database.
        source: How the tenant was resolved - 'host' if parsed from the
            request host, 'explicit' if bound directly by a caller.
    """

    tenant_id: str
    subdomain: str
    database: str
    source: str = "host"
