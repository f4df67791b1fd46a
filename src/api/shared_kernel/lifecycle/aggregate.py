"""Base behaviour for aggregates with a guarded status lifecycle."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, Generic

from shared_kernel.lifecycle.events import StatusChanged
from shared_kernel.lifecycle.exceptions import InvalidTransitionError
from shared_kernel.lifecycle.transitions import StatusT, TransitionTable


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, Enum) else str(status)


class LifecycleAggregate(Generic[StatusT]):
    """Mixin for dataclass aggregates whose status follows a transition table.

    Concrete aggregates are dataclasses that declare:
    - ``aggregate_type``: a short name used in events and errors
    - ``transitions``: the TransitionTable for their status enumeration
    - an ``id`` field whose ``str()`` is the identifier value
    - a ``status`` field
    - a ``_pending_events`` list field

    Business rules:
    - ``status`` is always a member of the table's enumeration
    - ``status`` changes only through ``transition_to()``; plain assignment
      after construction raises AttributeError
    - every successful transition records exactly one StatusChanged event
    - ``id`` and any name in ``immutable_fields`` cannot be reassigned

    Event collection:
    - Events stay buffered on the aggregate until release_events() is called
    - The caller releases them only after the aggregate has been persisted
    """

    aggregate_type: ClassVar[str]
    transitions: ClassVar[TransitionTable[Any]]
    immutable_fields: ClassVar[frozenset[str]] = frozenset()

    status: StatusT
    _pending_events: list[Any]

    def __post_init__(self) -> None:
        status_type = self.transitions.status_type
        try:
            status = status_type(self.status)
        except ValueError as e:
            raise ValueError(
                f"Invalid {self.aggregate_type} status: {self.status!r}"
            ) from e
        object.__setattr__(self, "status", status)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__:
            if name == "status":
                raise AttributeError(
                    f"{type(self).__name__}.status can only change through transition_to()"
                )
            if name == "id" or name in self.immutable_fields:
                raise AttributeError(
                    f"{type(self).__name__}.{name} cannot be changed after creation"
                )
        super().__setattr__(name, value)

    @property
    def aggregate_id(self) -> str:
        """String form of the aggregate identifier."""
        return str(getattr(self, "id"))

    @property
    def is_terminal(self) -> bool:
        """Whether the aggregate has reached a status with no way out."""
        return self.transitions.is_terminal(self.status)

    @property
    def pending_events(self) -> tuple[Any, ...]:
        """Read-only view of events recorded but not yet released."""
        return tuple(self._pending_events)

    def can_transition_to(self, target: StatusT) -> bool:
        """Check whether ``target`` is reachable from the current status."""
        return self.transitions.can_transition(self.status, target)

    def transition_to(
        self,
        target: StatusT,
        payload: Mapping[str, Any] | None = None,
    ) -> StatusChanged:
        """Move to ``target`` if the transition table allows it.

        The check and the status write happen together: either the status
        changes and one StatusChanged event is buffered, or nothing changes.

        Args:
            target: The status to move to
            payload: Optional operation-specific data carried by the event

        Returns:
            The StatusChanged event that was recorded

        Raises:
            InvalidTransitionError: If target is not allowed from the current status
        """
        current = self.status
        if not self.transitions.can_transition(current, target):
            raise InvalidTransitionError(
                aggregate_type=self.aggregate_type,
                aggregate_id=self.aggregate_id,
                from_status=_status_value(current),
                to_status=_status_value(target),
            )

        event = StatusChanged(
            aggregate_type=self.aggregate_type,
            aggregate_id=self.aggregate_id,
            from_status=_status_value(current),
            to_status=_status_value(target),
            occurred_at=datetime.now(UTC),
            payload=payload or {},
        )
        object.__setattr__(self, "status", self.transitions.status_type(target))
        self._pending_events.append(event)
        return event

    def release_events(self) -> list[Any]:
        """Return and clear pending domain events.

        Returns all events recorded since the last call, in recording order.
        A second call in a row returns an empty list.

        Returns:
            List of pending domain events
        """
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
