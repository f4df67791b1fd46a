"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
and between the tenancy and billing bounded contexts.
"""

import pytest
from pytest_archon import archrule

CONTEXTS = ["tenancy", "billing"]


@pytest.mark.parametrize("context", CONTEXTS)
class TestDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self, context):
        """Domain objects should not know about databases or sessions."""
        (
            archrule(f"{context}_domain_no_infrastructure")
            .match(f"{context}.domain*")
            .should_not_import(f"{context}.infrastructure*", "infrastructure*")
            .check(context)
        )

    def test_domain_does_not_import_application(self, context):
        (
            archrule(f"{context}_domain_no_application")
            .match(f"{context}.domain*")
            .should_not_import(f"{context}.application*")
            .check(context)
        )

    def test_domain_does_not_import_frameworks(self, context):
        """Domain objects should be framework-agnostic."""
        (
            archrule(f"{context}_domain_no_frameworks")
            .match(f"{context}.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check(context)
        )


@pytest.mark.parametrize("context", CONTEXTS)
class TestPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self, context):
        """Ports define interfaces; they should not know implementations."""
        (
            archrule(f"{context}_ports_no_infrastructure")
            .match(f"{context}.ports*")
            .should_not_import(f"{context}.infrastructure*")
            .check(context)
        )

    def test_ports_does_not_import_application(self, context):
        (
            archrule(f"{context}_ports_no_application")
            .match(f"{context}.ports*")
            .should_not_import(f"{context}.application*")
            .check(context)
        )


class TestApplicationLayerBoundaries:
    @pytest.mark.parametrize("context", CONTEXTS)
    def test_application_does_not_import_fastapi(self, context):
        (
            archrule(f"{context}_application_no_fastapi")
            .match(f"{context}.application*")
            .should_not_import("fastapi*", "starlette*")
            .check(context)
        )


class TestBoundedContextIsolation:
    """Billing runs inside a bound tenant context but never touches the registry."""

    def test_billing_core_does_not_import_tenancy(self):
        (
            archrule("billing_no_tenancy")
            .match(
                "billing.domain*",
                "billing.application*",
                "billing.ports*",
                "billing.infrastructure*",
            )
            .should_not_import("tenancy*")
            .check("billing")
        )

    def test_tenancy_does_not_import_billing(self):
        (
            archrule("tenancy_no_billing")
            .match("tenancy*")
            .should_not_import("billing*")
            .check("tenancy")
        )


class TestSharedKernelBoundaries:
    def test_shared_kernel_does_not_import_contexts(self):
        """The shared kernel is a dependency of contexts, never the reverse."""
        (
            archrule("shared_kernel_independent")
            .match("shared_kernel*")
            .should_not_import("tenancy*", "billing*", "infrastructure*")
            .check("shared_kernel")
        )
