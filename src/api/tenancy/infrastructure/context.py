"""Request-scoped tenant context binding.

Binding a tenant opens a session on that tenant's dedicated database and
makes it the active storage context for the current execution scope. The
binding lives in a ContextVar, so every asyncio task (and every thread)
sees only its own tenant; nothing is stored in a plain module global.

Usage:
    async with binder.bind(tenant) as ctx:
        invoices = InvoiceRepository(session=ctx.session)
        ...
    # session closed, previous binding (if any) restored
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import DatabaseConnectionError
from shared_kernel.middleware.tenant_context import TenantContext
from tenancy.domain.aggregates import Tenant
from tenancy.domain.exceptions import TenantInactiveError
from tenancy.infrastructure.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from tenancy.ports.exceptions import (
    ContextAlreadyBoundError,
    NoTenantContextError,
    TenantContextReleasedError,
)
from tenancy.ports.sessions import TenantSessionFactory

_current_context: ContextVar[BoundTenantContext | None] = ContextVar(
    "current_tenant_context", default=None
)


class BoundTenantContext:
    """Live handle on a bound tenant: its identity and database session.

    The handle refuses access to its session once released, so a stale
    reference kept past the end of a request cannot reach tenant data.
    """

    def __init__(self, tenant: TenantContext, session: AsyncSession) -> None:
        self._tenant = tenant
        self._session = session
        self._released = False

    @property
    def tenant(self) -> TenantContext:
        """The resolved tenant this context is bound to."""
        return self._tenant

    @property
    def tenant_id(self) -> str:
        return self._tenant.tenant_id

    @property
    def database(self) -> str:
        return self._tenant.database

    @property
    def released(self) -> bool:
        return self._released

    @property
    def session(self) -> AsyncSession:
        """Session on the tenant's database.

        Raises:
            TenantContextReleasedError: If the binding has been released
        """
        if self._released:
            raise TenantContextReleasedError(
                f"Tenant context for {self._tenant.tenant_id} has been released"
            )
        return self._session

    def _release(self) -> None:
        self._released = True

    def __repr__(self) -> str:
        return (
            f"<BoundTenantContext(tenant_id={self._tenant.tenant_id}, "
            f"database={self._tenant.database}, released={self._released})>"
        )


def current_tenant_context() -> BoundTenantContext:
    """Return the tenant context bound in the current execution scope.

    Raises:
        NoTenantContextError: If no tenant is bound
    """
    bound = _current_context.get()
    if bound is None:
        raise NoTenantContextError("No tenant context is bound")
    return bound


def has_tenant_context() -> bool:
    """Check whether a tenant is bound in the current execution scope."""
    return _current_context.get() is not None


class TenantContextBinder:
    """Binds a tenant's database as the active storage context.

    Nesting policy: a bind while another bind is active raises
    ContextAlreadyBoundError, unless ``allow_nested`` is set. With nesting
    allowed, the inner binding shadows the outer one and releasing it
    restores the outer binding.
    """

    def __init__(
        self,
        sessions: TenantSessionFactory,
        allow_nested: bool = False,
        probe: TenantContextProbe | None = None,
    ) -> None:
        """Initialize the binder.

        Args:
            sessions: Opens sessions on tenant databases
            allow_nested: Permit stack-based nested binding
            probe: Optional domain probe for observability
        """
        self._sessions = sessions
        self._allow_nested = allow_nested
        self._probe = probe or DefaultTenantContextProbe()

    @asynccontextmanager
    async def bind(
        self,
        tenant: Tenant,
        source: str = "explicit",
    ) -> AsyncIterator[BoundTenantContext]:
        """Make ``tenant``'s database the active context for this scope.

        The binding is released on every exit path (normal return, error,
        cancellation): the handle is invalidated, the previous binding is
        restored (or cleared), and the session is closed.

        Args:
            tenant: The tenant to bind
            source: How the tenant was identified, e.g. "host"

        Yields:
            The bound context handle

        Raises:
            ContextAlreadyBoundError: If a tenant is already bound and nesting is off
            TenantInactiveError: If the tenant is deactivated
            DatabaseConnectionError: If the tenant database cannot be reached
        """
        outer = _current_context.get()
        if outer is not None and not self._allow_nested:
            self._probe.nested_binding_rejected(outer.tenant_id, tenant.id.value)
            raise ContextAlreadyBoundError(outer.tenant_id, tenant.id.value)

        if not tenant.is_active:
            raise TenantInactiveError(tenant.id.value, tenant.subdomain.value)

        session = self._sessions.open_session(tenant.database)
        try:
            # Acquire the connection up front so no business logic runs
            # against a tenant whose database is unreachable. The rollback
            # ends the autobegun transaction so callers can session.begin().
            await session.connection()
            await session.rollback()
        except (SQLAlchemyError, OSError) as e:
            self._probe.connection_failed(tenant.id.value, tenant.database, e)
            await session.close()
            raise DatabaseConnectionError(
                f"Cannot connect to tenant database '{tenant.database}'"
            ) from e
        except BaseException:
            await session.close()
            raise

        bound = BoundTenantContext(tenant.to_context(source), session)
        token = _current_context.set(bound)
        log_tokens = structlog.contextvars.bind_contextvars(
            tenant_id=tenant.id.value,
            tenant_subdomain=tenant.subdomain.value,
        )
        self._probe.context_bound(
            tenant.id.value, tenant.database, nested=outer is not None
        )

        failed = True
        try:
            yield bound
            failed = False
        finally:
            bound._release()
            _current_context.reset(token)
            structlog.contextvars.reset_contextvars(**log_tokens)
            try:
                await session.close()
            finally:
                self._probe.context_released(tenant.id.value, failed=failed)
