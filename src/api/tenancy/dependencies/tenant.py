from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_central_session, get_tenant_engines
from infrastructure.database.tenant_engines import TenantEngineRegistry
from infrastructure.event_dependencies import get_event_dispatcher
from infrastructure.settings import get_tenancy_settings
from shared_kernel.events import EventDispatcher
from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    DefaultTenantServiceProbe,
    TenantResolverProbe,
    TenantServiceProbe,
)
from tenancy.application.services import TenantResolver, TenantService
from tenancy.infrastructure.context import TenantContextBinder
from tenancy.infrastructure.tenant_repository import TenantRepository


def get_tenant_resolver_probe() -> TenantResolverProbe:
    """Get TenantResolverProbe instance.

    Returns:
        DefaultTenantResolverProbe instance for observability
    """
    return DefaultTenantResolverProbe()


def get_tenant_service_probe() -> TenantServiceProbe:
    """Get TenantServiceProbe instance.

    Returns:
        DefaultTenantServiceProbe instance for observability
    """
    return DefaultTenantServiceProbe()


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_central_session)],
) -> TenantRepository:
    """Get TenantRepository instance.

    Args:
        session: Session on the central database

    Returns:
        TenantRepository instance
    """
    return TenantRepository(session=session)


def get_tenant_resolver(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    probe: Annotated[TenantResolverProbe, Depends(get_tenant_resolver_probe)],
) -> TenantResolver:
    """Get TenantResolver configured with the tenancy base domain."""
    return TenantResolver(
        tenant_repository=tenant_repo,
        base_domain=get_tenancy_settings().base_domain,
        probe=probe,
    )


def get_tenant_context_binder(
    engines: Annotated[TenantEngineRegistry, Depends(get_tenant_engines)],
) -> TenantContextBinder:
    """Get TenantContextBinder over the shared tenant engine registry."""
    return TenantContextBinder(
        sessions=engines,
        allow_nested=get_tenancy_settings().allow_nested_binding,
    )


def get_tenant_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    session: Annotated[AsyncSession, Depends(get_central_session)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    probe: Annotated[TenantServiceProbe, Depends(get_tenant_service_probe)],
) -> TenantService:
    """Get TenantService instance.

    Args:
        tenant_repo: Tenant repository (shares session via FastAPI dependency caching)
        session: Central database session for transaction management
        dispatcher: Receives released tenant events after commit
        probe: Tenant service probe for observability

    Returns:
        TenantService instance
    """
    return TenantService(
        tenant_repository=tenant_repo,
        session=session,
        dispatcher=dispatcher,
        probe=probe,
    )
