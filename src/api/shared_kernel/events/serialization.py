"""Event serialization for dispatch and audit.

Converts released domain events (frozen dataclasses) into JSON-compatible
dictionaries so subscribers and log sinks never handle live domain objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def _to_primitive(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return {str(k): _to_primitive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_primitive(getattr(value, f.name)) for f in fields(value)}
    return value


def serialize_event(event: Any) -> dict[str, Any]:
    """Convert a domain event to a JSON-serializable dictionary.

    Args:
        event: The domain event to serialize (a dataclass instance)

    Returns:
        A dictionary with all event fields and a __type__ key for the event type

    Raises:
        ValueError: If the event is not a dataclass instance
    """
    if not is_dataclass(event) or isinstance(event, type):
        raise ValueError(f"Cannot serialize non-dataclass event: {event!r}")

    data = _to_primitive(event)
    data["__type__"] = type(event).__name__
    return data
