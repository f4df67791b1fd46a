"""Status lifecycle engine shared by every stateful aggregate.

Aggregates declare a static TransitionTable for their status enumeration and
inherit LifecycleAggregate, which enforces the table and buffers one
StatusChanged event per successful transition until the caller releases
them after persistence.
"""

from shared_kernel.lifecycle.aggregate import LifecycleAggregate
from shared_kernel.lifecycle.events import StatusChanged
from shared_kernel.lifecycle.exceptions import InvalidTransitionError
from shared_kernel.lifecycle.transitions import TransitionTable

__all__ = [
    "InvalidTransitionError",
    "LifecycleAggregate",
    "StatusChanged",
    "TransitionTable",
]
