"""Domain exceptions for the tenancy bounded context."""

from __future__ import annotations

from shared_kernel.exceptions import DomainError


class TenantNotFoundError(DomainError):
    """Raised when no tenant matches the requested host or subdomain.

    Also raised for malformed hosts that carry no subdomain at all.
    """

    code = "tenant_not_found"

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"No tenant found for '{host}'")


class TenantInactiveError(DomainError):
    """Raised when the matched tenant has been deactivated."""

    code = "tenant_inactive"

    def __init__(self, tenant_id: str, subdomain: str) -> None:
        self.tenant_id = tenant_id
        self.subdomain = subdomain
        super().__init__(f"Tenant '{subdomain}' is inactive")


class TenantStateError(DomainError):
    """Raised when deactivating an inactive tenant or reactivating an active one."""

    code = "tenant_state_conflict"


class TenantNotRegisteredError(DomainError):
    """Raised when a tenant operation targets an ID that does not exist."""

    code = "tenant_not_registered"
