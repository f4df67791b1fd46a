"""Tenant resolution from the request host."""

from __future__ import annotations

from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantInactiveError, TenantNotFoundError
from tenancy.domain.value_objects import Subdomain
from tenancy.ports.repositories import ITenantRepository


class TenantResolver:
    """Maps an inbound host (or bare subdomain) to exactly one active tenant.

    Resolution is deterministic: the subdomain is the unique lookup key, and
    inactive tenants are refused rather than skipped.
    """

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        base_domain: str | None = None,
        probe: TenantResolverProbe | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            tenant_repository: Repository over the central tenant registry
            base_domain: Domain tenants are served under, if configured
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._base_domain = base_domain
        self._probe = probe or DefaultTenantResolverProbe()

    async def resolve(self, host_or_subdomain: str) -> Tenant:
        """Look up the tenant served at the given host.

        Args:
            host_or_subdomain: Request host (``acme.larasuite.app:443``) or a
                bare subdomain (``acme``)

        Returns:
            The matching active Tenant

        Raises:
            TenantNotFoundError: If the host is malformed or no tenant matches
            TenantInactiveError: If the matching tenant is deactivated
        """
        try:
            subdomain = Subdomain.from_host(host_or_subdomain, self._base_domain)
        except ValueError:
            self._probe.malformed_host(host_or_subdomain)
            raise TenantNotFoundError(host_or_subdomain) from None

        tenant = await self._tenant_repository.get_by_subdomain(subdomain)
        if tenant is None:
            self._probe.tenant_not_found(subdomain.value)
            raise TenantNotFoundError(subdomain.value)

        if not tenant.is_active:
            self._probe.tenant_inactive(tenant.id.value, subdomain.value)
            raise TenantInactiveError(tenant.id.value, subdomain.value)

        self._probe.tenant_resolved(tenant.id.value, subdomain.value)
        return tenant
