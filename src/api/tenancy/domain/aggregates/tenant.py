"""Tenant aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.domain.events import (
    TenantDeactivated,
    TenantProvisioned,
    TenantReactivated,
)
from tenancy.domain.exceptions import TenantStateError
from tenancy.domain.value_objects import (
    Subdomain,
    TenantId,
    default_database_name,
    validate_database_name,
)

if TYPE_CHECKING:
    from tenancy.domain.events import DomainEvent

_IMMUTABLE_FIELDS = frozenset({"id", "database"})


@dataclass
class Tenant:
    """Tenant aggregate representing one customer account.

    Each tenant owns a dedicated database. The tenant record itself lives
    in the central database and is read on every request to decide which
    database the request may touch.

    Business rules:
    - Subdomains are globally unique (enforced by the repository)
    - The database reference never changes once the tenant exists
    - Tenants are deactivated, never deleted

    Event collection:
    - All mutating operations record domain events
    - Events can be released via release_events() after persistence
    """

    id: TenantId
    name: str
    subdomain: Subdomain
    database: str
    is_active: bool = True
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        validate_database_name(self.database)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Tenant.{name} cannot be changed after creation")
        super().__setattr__(name, value)

    @classmethod
    def provision(
        cls,
        name: str,
        subdomain: Subdomain,
        database: str | None = None,
    ) -> "Tenant":
        """Factory method for registering a new tenant.

        Creating the physical database is not part of this method; the
        tenant only records which database it will use.

        Args:
            name: Display name of the tenant
            subdomain: Subdomain the tenant is served under
            database: Dedicated database name; derived from the subdomain if omitted

        Returns:
            A new active Tenant with a TenantProvisioned event recorded

        Raises:
            ValueError: If the name is blank or the database name is invalid
        """
        if not name.strip():
            raise ValueError("Tenant name must not be empty")

        tenant = cls(
            id=TenantId.generate(),
            name=name.strip(),
            subdomain=subdomain,
            database=database or default_database_name(subdomain),
        )
        tenant._pending_events.append(
            TenantProvisioned(
                tenant_id=tenant.id.value,
                name=tenant.name,
                subdomain=tenant.subdomain.value,
                database=tenant.database,
                occurred_at=datetime.now(UTC),
            )
        )
        return tenant

    def deactivate(self) -> None:
        """Soft-deactivate the tenant so requests for it are refused.

        Raises:
            TenantStateError: If the tenant is already inactive
        """
        if not self.is_active:
            raise TenantStateError(f"Tenant {self.id.value} is already inactive")

        self.is_active = False
        self._pending_events.append(
            TenantDeactivated(tenant_id=self.id.value, occurred_at=datetime.now(UTC))
        )

    def reactivate(self) -> None:
        """Allow a deactivated tenant to serve requests again.

        Raises:
            TenantStateError: If the tenant is already active
        """
        if self.is_active:
            raise TenantStateError(f"Tenant {self.id.value} is already active")

        self.is_active = True
        self._pending_events.append(
            TenantReactivated(tenant_id=self.id.value, occurred_at=datetime.now(UTC))
        )

    def to_context(self, source: str = "explicit") -> TenantContext:
        """Describe this tenant as a shared-kernel TenantContext value."""
        return TenantContext(
            tenant_id=self.id.value,
            subdomain=self.subdomain.value,
            database=self.database,
            source=source,
        )

    def release_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events.

        Returns:
            List of pending domain events, oldest first
        """
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
