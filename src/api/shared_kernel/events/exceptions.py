"""Exceptions for in-process event dispatch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HandlerFailure:
    """A single subscriber failure captured during dispatch."""

    event_type: str
    handler: str
    error: Exception


class EventDispatchError(Exception):
    """Raised after dispatch when one or more subscribers failed.

    Every event is still offered to every subscriber before this is raised,
    so one failing collaborator never hides an event from the others.
    """

    def __init__(self, failures: list[HandlerFailure]) -> None:
        self.failures = failures
        summary = ", ".join(f"{f.handler} on {f.event_type}" for f in failures)
        super().__init__(f"{len(failures)} event handler(s) failed: {summary}")
