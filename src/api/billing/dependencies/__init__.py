"""FastAPI dependencies for the billing bounded context."""

from billing.dependencies.services import (
    get_client_repository,
    get_client_service,
    get_invoice_repository,
    get_invoice_service,
)

__all__ = [
    "get_client_repository",
    "get_client_service",
    "get_invoice_repository",
    "get_invoice_service",
]
