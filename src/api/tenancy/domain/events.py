"""Domain events for the tenancy bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects released by the Tenant aggregate after it
has been persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TenantProvisioned:
    """Event raised when a tenant is registered in the central database.

    Attributes:
        tenant_id: The ULID of the new tenant
        name: Display name of the tenant
        subdomain: Subdomain the tenant is served under
        database: Name of the tenant's dedicated database
        occurred_at: When the event occurred (UTC)
    """

    tenant_id: str
    name: str
    subdomain: str
    database: str
    occurred_at: datetime


@dataclass(frozen=True)
class TenantDeactivated:
    """Event raised when a tenant is soft-deactivated.

    Requests for an inactive tenant are refused; its data is kept.
    """

    tenant_id: str
    occurred_at: datetime


@dataclass(frozen=True)
class TenantReactivated:
    """Event raised when a deactivated tenant is allowed back in."""

    tenant_id: str
    occurred_at: datetime


# Type alias for all domain events in the tenancy context
DomainEvent = TenantProvisioned | TenantDeactivated | TenantReactivated
