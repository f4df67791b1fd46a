"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from infrastructure.database.dependencies import close_database_connections
from infrastructure.database.exceptions import DatabaseError
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from shared_kernel.exceptions import DomainError
from tenancy.dependencies import get_tenant_context
from tenancy.infrastructure.context import BoundTenantContext

_CONFLICT_CODES = frozenset(
    {
        "invalid_transition",
        "duplicate_subdomain",
        "duplicate_tax_id",
        "tenant_state_conflict",
        "client_has_outstanding_invoices",
    }
)


def status_for(error: DomainError) -> int:
    """Map a domain error code to an HTTP status."""
    if error.code.endswith("_not_found") or error.code == "tenant_not_registered":
        return status.HTTP_404_NOT_FOUND
    if error.code == "tenant_inactive":
        return status.HTTP_403_FORBIDDEN
    if error.code in _CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    if error.code.startswith("tenant_context_"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_422_UNPROCESSABLE_ENTITY


@asynccontextmanager
async def larasuite_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration on startup
    - Central and tenant engine disposal on shutdown
    """
    configure_logging()
    yield
    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant field-service management API",
    version=__version__,
    lifespan=larasuite_lifespan,
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": {"code": exc.code, "message": str(exc)}},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/tenant")
async def health_tenant(
    ctx: Annotated[BoundTenantContext, Depends(get_tenant_context)],
) -> dict:
    """Check that the request host resolves and its database is reachable."""
    return {
        "status": "ok",
        "tenant_id": ctx.tenant_id,
        "subdomain": ctx.tenant.subdomain,
        "database": ctx.database,
    }
