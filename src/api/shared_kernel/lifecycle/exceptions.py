"""Exceptions raised by the lifecycle engine."""

from __future__ import annotations

from shared_kernel.exceptions import DomainError


class InvalidTransitionError(DomainError):
    """Raised when a status change is not in the aggregate's transition table.

    The aggregate is left untouched: its status is unchanged and no event
    is recorded.

    Attributes:
        aggregate_type: Kind of aggregate that rejected the change
        aggregate_id: Identifier of that aggregate
        from_status: Status the aggregate is currently in
        to_status: Status that was requested
    """

    code = "invalid_transition"

    def __init__(
        self,
        aggregate_type: str,
        aggregate_id: str,
        from_status: str,
        to_status: str,
    ) -> None:
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot move {aggregate_type} {aggregate_id} "
            f"from '{from_status}' to '{to_status}'"
        )
