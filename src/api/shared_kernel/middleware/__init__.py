"""Shared middleware for cross-cutting concerns.

This module contains the request-scoped values that are shared across
bounded contexts. The tenant context value object is the primary
component; the resolution logic lives in the tenancy bounded context.
"""

from shared_kernel.middleware.tenant_context import TenantContext

__all__ = ["TenantContext"]
