"""Unit tests for the tenant context FastAPI dependency.

Covers the Host header resolution path:
- Known active tenant (context bound for the request, released afterwards)
- Unknown or malformed host (404)
- Deactivated tenant (403)
"""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import HTTPException

from tenancy.application.services import TenantResolver
from tenancy.dependencies.tenant_context import (
    get_tenant_context,
    resolve_request_tenant,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantInactiveError, TenantNotFoundError
from tenancy.domain.value_objects import Subdomain, TenantId
from tenancy.infrastructure.context import TenantContextBinder, has_tenant_context


@pytest.fixture
def acme() -> Tenant:
    return Tenant(
        id=TenantId.generate(),
        name="Acme",
        subdomain=Subdomain("acme"),
        database="tenant_acme",
    )


@pytest.fixture
def mock_resolver(acme) -> Mock:
    resolver = Mock(spec=TenantResolver)
    resolver.resolve = AsyncMock(return_value=acme)
    return resolver


@pytest.fixture
def binder() -> TenantContextBinder:
    sessions = Mock()
    session = Mock()
    session.connection = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    sessions.open_session = Mock(return_value=session)
    return TenantContextBinder(sessions=sessions)


class TestGetTenantContext:
    """Tests for get_tenant_context()."""

    @pytest.mark.asyncio
    async def test_yields_bound_context_for_host(self, mock_resolver, binder, acme):
        dependency = get_tenant_context(
            resolver=mock_resolver, binder=binder, host="acme.larasuite.app"
        )

        ctx = await anext(dependency)

        assert ctx.tenant_id == acme.id.value
        assert ctx.tenant.source == "host"
        assert has_tenant_context() is True
        mock_resolver.resolve.assert_awaited_once_with("acme.larasuite.app")

        with pytest.raises(StopAsyncIteration):
            await anext(dependency)

        assert ctx.released is True
        assert has_tenant_context() is False

    @pytest.mark.asyncio
    async def test_unknown_host_maps_to_404(self, mock_resolver, binder):
        mock_resolver.resolve.side_effect = TenantNotFoundError("ghost")

        with pytest.raises(HTTPException) as exc_info:
            await anext(
                get_tenant_context(resolver=mock_resolver, binder=binder, host="ghost")
            )

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail["code"] == "tenant_not_found"
        assert "ghost" in exc_info.value.detail["message"]

    @pytest.mark.asyncio
    async def test_inactive_tenant_maps_to_403(self, mock_resolver, binder, acme):
        mock_resolver.resolve.side_effect = TenantInactiveError(acme.id.value, "acme")

        with pytest.raises(HTTPException) as exc_info:
            await anext(
                get_tenant_context(resolver=mock_resolver, binder=binder, host="acme")
            )

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail["code"] == "tenant_inactive"

    @pytest.mark.asyncio
    async def test_missing_host_resolves_empty_string(self, mock_resolver, binder):
        mock_resolver.resolve.side_effect = TenantNotFoundError("")

        with pytest.raises(HTTPException) as exc_info:
            await anext(
                get_tenant_context(resolver=mock_resolver, binder=binder, host=None)
            )

        assert exc_info.value.status_code == 404
        mock_resolver.resolve.assert_awaited_once_with("")


class TestResolveRequestTenant:
    """Tests for resolve_request_tenant() on its own, without binding."""

    @pytest.mark.asyncio
    async def test_returns_active_tenant(self, mock_resolver, acme):
        tenant = await resolve_request_tenant("acme.larasuite.app", mock_resolver)

        assert tenant is acme

    @pytest.mark.asyncio
    async def test_not_found_maps_to_404_with_code(self, mock_resolver):
        error = TenantNotFoundError("ghost")
        mock_resolver.resolve.side_effect = error

        with pytest.raises(HTTPException) as exc_info:
            await resolve_request_tenant("ghost.larasuite.app", mock_resolver)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == {
            "code": "tenant_not_found",
            "message": error.message,
        }
        assert isinstance(exc_info.value.__cause__, TenantNotFoundError)

    @pytest.mark.asyncio
    async def test_inactive_maps_to_403_with_code(self, mock_resolver, acme):
        error = TenantInactiveError(acme.id.value, "acme")
        mock_resolver.resolve.side_effect = error

        with pytest.raises(HTTPException) as exc_info:
            await resolve_request_tenant("acme.larasuite.app", mock_resolver)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == {
            "code": "tenant_inactive",
            "message": error.message,
        }

    @pytest.mark.asyncio
    async def test_missing_host_is_looked_up_as_empty(self, mock_resolver):
        mock_resolver.resolve.side_effect = TenantNotFoundError("")

        with pytest.raises(HTTPException):
            await resolve_request_tenant(None, mock_resolver)

        mock_resolver.resolve.assert_awaited_once_with("")
