"""Tenant context FastAPI dependency.

Resolves the tenant from the request Host header and binds that tenant's
database for the duration of the request. The binding is released when
the response has been produced, whether the endpoint succeeded or raised.

Usage in FastAPI routes:
    @router.get("/invoices/{invoice_id}")
    async def get_invoice(
        ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
    ):
        repo = InvoiceRepository(session=ctx.session)
        ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from tenancy.application.services import TenantResolver
from tenancy.dependencies.tenant import get_tenant_context_binder, get_tenant_resolver
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantInactiveError, TenantNotFoundError
from tenancy.infrastructure.context import BoundTenantContext, TenantContextBinder


async def resolve_request_tenant(
    host: str | None,
    resolver: TenantResolver,
) -> Tenant:
    """Resolve the tenant for a request host, mapping failures to HTTP errors.

    Args:
        host: The Host header value, or None if missing
        resolver: Resolves hosts to active tenants

    Returns:
        The active tenant served at the host

    Raises:
        HTTPException 404: If no tenant is served at the host
        HTTPException 403: If the tenant is deactivated
    """
    try:
        return await resolver.resolve(host or "")
    except TenantNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": e.code, "message": e.message},
        ) from e
    except TenantInactiveError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": e.code, "message": e.message},
        ) from e


async def get_tenant_context(
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    binder: Annotated[TenantContextBinder, Depends(get_tenant_context_binder)],
    host: Annotated[str | None, Header()] = None,
) -> AsyncIterator[BoundTenantContext]:
    """Yield the request's bound tenant context.

    Args:
        resolver: Resolves hosts to active tenants
        binder: Binds the tenant's database as the active context
        host: The Host header value

    Yields:
        The bound tenant context, released after the response
    """
    tenant = await resolve_request_tenant(host, resolver)
    async with binder.bind(tenant, source="host") as bound:
        yield bound
