"""Protocols (ports) for domain event dispatch.

Application services hand released events to an IEventDispatcher once the
aggregate has been persisted. Subscribers (notifications, fiscal submission,
audit logging) register handlers without the services knowing about them.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, runtime_checkable

EventHandler = Callable[[Any], Awaitable[None]]


@runtime_checkable
class IEventDispatcher(Protocol):
    """Delivers released domain events to subscribers."""

    def subscribe(self, event_type: type | str, handler: EventHandler) -> None:
        """Register a handler for one event type.

        Args:
            event_type: Event class or its name (e.g. "StatusChanged")
            handler: Async callable invoked with each matching event
        """
        ...

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler that receives every event."""
        ...

    async def dispatch(self, events: Sequence[Any]) -> None:
        """Deliver events to subscribers in the order given.

        Raises:
            EventDispatchError: If any handler failed
        """
        ...
