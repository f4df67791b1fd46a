"""In-process domain event dispatcher.

Delivers events released by aggregates to registered subscribers. The
dispatcher is only handed events after the owning aggregate has been
persisted, so subscribers never hear about state that failed to save.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from shared_kernel.events.exceptions import EventDispatchError, HandlerFailure
from shared_kernel.events.observability import (
    DefaultEventDispatcherProbe,
    EventDispatcherProbe,
)
from shared_kernel.events.ports import EventHandler


def _handler_name(handler: EventHandler) -> str:
    name = getattr(handler, "__qualname__", None)
    if name is None:
        name = type(handler).__qualname__
    return name


class EventDispatcher:
    """Dispatches domain events to handlers keyed by event class name.

    Handlers for one event run in registration order, catch-all handlers
    last. Events are processed in the order given. A failing handler is
    recorded and skipped; once every event has been offered to every
    handler, the failures are raised together as EventDispatchError.

    Registration is expected at startup. Dispatch only reads the handler
    lists, so one dispatcher can serve concurrent requests.
    """

    def __init__(self, probe: EventDispatcherProbe | None = None) -> None:
        self._handlers: defaultdict[str, list[EventHandler]] = defaultdict(list)
        self._catch_all: list[EventHandler] = []
        self._probe = probe or DefaultEventDispatcherProbe()

    def subscribe(self, event_type: type | str, handler: EventHandler) -> None:
        """Register a handler for one event type.

        Args:
            event_type: Event class or its name
            handler: Async callable invoked with each matching event
        """
        name = event_type if isinstance(event_type, str) else event_type.__name__
        self._handlers[name].append(handler)
        self._probe.handler_subscribed(name, _handler_name(handler))

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler that receives every event."""
        self._catch_all.append(handler)
        self._probe.handler_subscribed("*", _handler_name(handler))

    def handlers_for(self, event_type: str) -> list[EventHandler]:
        """Return the handlers that will receive an event of this type."""
        return [*self._handlers.get(event_type, []), *self._catch_all]

    async def dispatch(self, events: Sequence[Any]) -> None:
        """Deliver events to subscribers in the order given.

        Args:
            events: Events released from an aggregate after persistence

        Raises:
            EventDispatchError: If any handler failed
        """
        failures: list[HandlerFailure] = []

        for event in events:
            event_type = type(event).__name__
            handlers = self.handlers_for(event_type)

            if not handlers:
                self._probe.event_unhandled(event_type)
                continue

            for handler in handlers:
                try:
                    await handler(event)
                except Exception as e:
                    self._probe.handler_failed(event_type, _handler_name(handler), e)
                    failures.append(
                        HandlerFailure(
                            event_type=event_type,
                            handler=_handler_name(handler),
                            error=e,
                        )
                    )

            self._probe.event_dispatched(event_type, len(handlers))

        if failures:
            raise EventDispatchError(failures)
