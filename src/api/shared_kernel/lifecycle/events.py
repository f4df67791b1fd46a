"""Domain events recorded by the lifecycle engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any


def _empty_payload() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class StatusChanged:
    """Event raised when an aggregate moves from one status to another.

    Attributes:
        aggregate_type: Kind of aggregate (e.g. "invoice", "client")
        aggregate_id: Identifier of the aggregate that changed
        from_status: Status before the transition
        to_status: Status after the transition
        occurred_at: When the transition happened (UTC)
        payload: Operation-specific data (e.g. amount paid, cancel reason)
    """

    aggregate_type: str
    aggregate_id: str
    from_status: str
    to_status: str
    occurred_at: datetime
    payload: Mapping[str, Any] = field(default_factory=_empty_payload)

    def __post_init__(self) -> None:
        # Freeze the payload so released events cannot be altered downstream
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))
