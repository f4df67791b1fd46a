"""Billing service wiring.

Every billing dependency hangs off the request's bound tenant context, so
repositories only ever see the current tenant's database session.
"""

from typing import Annotated

from fastapi import Depends

from billing.application.observability import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
    DefaultInvoiceServiceProbe,
    InvoiceServiceProbe,
)
from billing.application.services import ClientService, InvoiceService
from billing.infrastructure.client_repository import ClientRepository
from billing.infrastructure.invoice_repository import InvoiceRepository
from infrastructure.event_dependencies import get_event_dispatcher
from shared_kernel.events import EventDispatcher
from tenancy.dependencies.tenant_context import get_tenant_context
from tenancy.infrastructure.context import BoundTenantContext


def get_invoice_service_probe() -> InvoiceServiceProbe:
    """Get InvoiceServiceProbe instance."""
    return DefaultInvoiceServiceProbe()


def get_client_service_probe() -> ClientServiceProbe:
    """Get ClientServiceProbe instance."""
    return DefaultClientServiceProbe()


def get_invoice_repository(
    ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
) -> InvoiceRepository:
    """Get InvoiceRepository on the bound tenant's session."""
    return InvoiceRepository(session=ctx.session)


def get_client_repository(
    ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
) -> ClientRepository:
    """Get ClientRepository on the bound tenant's session."""
    return ClientRepository(session=ctx.session)


def get_invoice_service(
    ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
    invoice_repo: Annotated[InvoiceRepository, Depends(get_invoice_repository)],
    client_repo: Annotated[ClientRepository, Depends(get_client_repository)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    probe: Annotated[InvoiceServiceProbe, Depends(get_invoice_service_probe)],
) -> InvoiceService:
    """Get InvoiceService instance.

    Args:
        ctx: Bound tenant context (shared via FastAPI dependency caching)
        invoice_repo: Invoice repository on the tenant session
        client_repo: Client repository on the tenant session
        dispatcher: Receives released events after commit
        probe: Invoice service probe for observability

    Returns:
        InvoiceService instance
    """
    return InvoiceService(
        invoice_repository=invoice_repo,
        client_repository=client_repo,
        session=ctx.session,
        dispatcher=dispatcher,
        probe=probe,
    )


def get_client_service(
    ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
    client_repo: Annotated[ClientRepository, Depends(get_client_repository)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    probe: Annotated[ClientServiceProbe, Depends(get_client_service_probe)],
) -> ClientService:
    """Get ClientService instance."""
    return ClientService(
        client_repository=client_repo,
        session=ctx.session,
        dispatcher=dispatcher,
        probe=probe,
    )
