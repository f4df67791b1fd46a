"""Audit trail subscriber.

Writes every dispatched domain event to the structured log. Register it with
``dispatcher.subscribe_all(AuditLogSubscriber())``.
"""

from __future__ import annotations

from typing import Any

import structlog

from shared_kernel.events.serialization import serialize_event


class AuditLogSubscriber:
    """Records released domain events as structured audit log entries."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("audit")

    async def __call__(self, event: Any) -> None:
        data = serialize_event(event)
        event_type = data.pop("__type__")
        self._logger.info("domain_event_recorded", event_type=event_type, event=data)
