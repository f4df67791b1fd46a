"""Event dispatcher dependency for FastAPI.

One dispatcher is shared by the whole process. Released domain events from
every bounded context go through it; the audit log subscriber is attached
to all event types at creation.
"""

from functools import lru_cache

from shared_kernel.events import AuditLogSubscriber, EventDispatcher


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    """Get the process-wide event dispatcher.

    Returns:
        EventDispatcher with the audit log subscriber attached
    """
    dispatcher = EventDispatcher()
    dispatcher.subscribe_all(AuditLogSubscriber())
    return dispatcher
