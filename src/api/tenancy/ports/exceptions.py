"""Port-level exceptions for the tenancy bounded context.

Repository exceptions signal violated persistence rules; context
exceptions signal incorrect use of the request-scoped tenant binding.
"""

from __future__ import annotations

from shared_kernel.exceptions import DomainError


class DuplicateSubdomainError(DomainError):
    """Raised when saving a tenant whose subdomain is already taken."""

    code = "duplicate_subdomain"


class TenantStorageReassignmentError(DomainError):
    """Raised when a save would point an existing tenant at another database."""

    code = "tenant_storage_reassignment"


class ContextAlreadyBoundError(DomainError):
    """Raised when binding a tenant while another binding is active.

    Nested binding is only allowed when the binder is configured for it.
    This is a programming error: the current operation should be aborted.
    """

    code = "tenant_context_already_bound"

    def __init__(self, bound_tenant_id: str, requested_tenant_id: str) -> None:
        self.bound_tenant_id = bound_tenant_id
        self.requested_tenant_id = requested_tenant_id
        super().__init__(
            f"Tenant context for {bound_tenant_id} is already bound; "
            f"cannot bind {requested_tenant_id}"
        )


class NoTenantContextError(DomainError):
    """Raised when tenant data is requested with no tenant bound."""

    code = "tenant_context_missing"


class TenantContextReleasedError(DomainError):
    """Raised when a released tenant context handle is used."""

    code = "tenant_context_released"
