"""In-process domain event dispatch.

Aggregates buffer events; application services release them after a
successful save and hand them to an IEventDispatcher, which fans them out
to subscribers such as the audit log.
"""

from shared_kernel.events.audit import AuditLogSubscriber
from shared_kernel.events.dispatcher import EventDispatcher
from shared_kernel.events.exceptions import EventDispatchError, HandlerFailure
from shared_kernel.events.ports import EventHandler, IEventDispatcher
from shared_kernel.events.serialization import serialize_event

__all__ = [
    "AuditLogSubscriber",
    "EventDispatchError",
    "EventDispatcher",
    "EventHandler",
    "HandlerFailure",
    "IEventDispatcher",
    "serialize_event",
]
