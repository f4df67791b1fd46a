"""Unit tests for the Tenant aggregate."""

import pytest

from tenancy.domain.aggregates import Tenant
from tenancy.domain.events import (
    TenantDeactivated,
    TenantProvisioned,
    TenantReactivated,
)
from tenancy.domain.exceptions import TenantStateError
from tenancy.domain.value_objects import Subdomain, TenantId


def _tenant(**overrides) -> Tenant:
    values = {
        "id": TenantId.generate(),
        "name": "Acme",
        "subdomain": Subdomain("acme"),
        "database": "tenant_acme",
    }
    values.update(overrides)
    return Tenant(**values)


class TestProvision:
    """Tests for Tenant.provision()."""

    def test_records_provisioned_event(self):
        tenant = Tenant.provision(name="Acme", subdomain=Subdomain("acme"))

        events = tenant.release_events()

        assert len(events) == 1
        assert isinstance(events[0], TenantProvisioned)
        assert events[0].tenant_id == tenant.id.value
        assert events[0].database == "tenant_acme"

    def test_uses_explicit_database(self):
        tenant = Tenant.provision(
            name="Acme", subdomain=Subdomain("acme"), database="acme_prod"
        )
        assert tenant.database == "acme_prod"

    def test_starts_active(self):
        tenant = Tenant.provision(name="Acme", subdomain=Subdomain("acme"))
        assert tenant.is_active is True

    def test_rejects_blank_name(self):
        with pytest.raises(ValueError):
            Tenant.provision(name="   ", subdomain=Subdomain("acme"))

    def test_rejects_invalid_database(self):
        with pytest.raises(ValueError):
            Tenant.provision(
                name="Acme", subdomain=Subdomain("acme"), database="drop table"
            )


class TestImmutableFields:
    """Tests for immutable identity and storage reference."""

    def test_database_cannot_be_changed(self):
        tenant = _tenant()
        with pytest.raises(AttributeError):
            tenant.database = "tenant_other"

    def test_id_cannot_be_changed(self):
        tenant = _tenant()
        with pytest.raises(AttributeError):
            tenant.id = TenantId.generate()


class TestActivation:
    """Tests for deactivate() and reactivate()."""

    def test_deactivate_records_event(self):
        tenant = _tenant()

        tenant.deactivate()

        assert tenant.is_active is False
        events = tenant.release_events()
        assert isinstance(events[0], TenantDeactivated)

    def test_deactivate_inactive_raises(self):
        tenant = _tenant(is_active=False)
        with pytest.raises(TenantStateError):
            tenant.deactivate()

    def test_reactivate_records_event(self):
        tenant = _tenant(is_active=False)

        tenant.reactivate()

        assert tenant.is_active is True
        assert isinstance(tenant.release_events()[0], TenantReactivated)

    def test_reactivate_active_raises(self):
        with pytest.raises(TenantStateError):
            _tenant().reactivate()

    def test_release_empties_buffer(self):
        tenant = _tenant()
        tenant.deactivate()

        tenant.release_events()

        assert tenant.release_events() == []


class TestToContext:
    """Tests for Tenant.to_context()."""

    def test_describes_tenant(self):
        tenant = _tenant()

        ctx = tenant.to_context(source="host")

        assert ctx.tenant_id == tenant.id.value
        assert ctx.subdomain == "acme"
        assert ctx.database == "tenant_acme"
        assert ctx.source == "host"
