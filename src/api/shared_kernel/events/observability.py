"""Observability probes for in-process event dispatch.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering the dispatcher with logging concerns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EventDispatcherProbe(Protocol):
    """Protocol for event dispatcher observability."""

    def handler_subscribed(self, event_type: str, handler: str) -> None:
        """Called when a handler is registered."""
        ...

    def event_dispatched(self, event_type: str, handler_count: int) -> None:
        """Called when an event has been offered to all its handlers."""
        ...

    def event_unhandled(self, event_type: str) -> None:
        """Called when an event has no subscribers."""
        ...

    def handler_failed(self, event_type: str, handler: str, error: Exception) -> None:
        """Called when a handler raises."""
        ...

    def with_context(self, context: ObservationContext) -> EventDispatcherProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEventDispatcherProbe:
    """Default implementation of EventDispatcherProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultEventDispatcherProbe:
        """Create a new probe with observation context bound."""
        return DefaultEventDispatcherProbe(logger=self._logger, context=context)

    def handler_subscribed(self, event_type: str, handler: str) -> None:
        self._logger.debug(
            "event_handler_subscribed",
            event_type=event_type,
            handler=handler,
            **self._get_context_kwargs(),
        )

    def event_dispatched(self, event_type: str, handler_count: int) -> None:
        self._logger.debug(
            "domain_event_dispatched",
            event_type=event_type,
            handler_count=handler_count,
            **self._get_context_kwargs(),
        )

    def event_unhandled(self, event_type: str) -> None:
        self._logger.debug(
            "domain_event_unhandled",
            event_type=event_type,
            **self._get_context_kwargs(),
        )

    def handler_failed(self, event_type: str, handler: str, error: Exception) -> None:
        self._logger.error(
            "event_handler_failed",
            event_type=event_type,
            handler=handler,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
