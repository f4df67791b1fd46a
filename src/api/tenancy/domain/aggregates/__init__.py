"""Domain aggregates for the tenancy context."""

from tenancy.domain.aggregates.tenant import Tenant

__all__ = ["Tenant"]
