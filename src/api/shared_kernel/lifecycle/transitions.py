"""Declarative status transition tables.

A transition table maps every member of a status enumeration to the set of
statuses it may move to directly. Tables are built once at import time and
are read-only afterwards, so they can be shared between concurrent requests
without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Generic, TypeVar

StatusT = TypeVar("StatusT", bound=Enum)


class TransitionTable(Generic[StatusT]):
    """Immutable map of allowed status-to-status moves for one entity type.

    The table must be total over the enumeration: every status needs an
    entry, even if that entry is empty (a terminal status).

    Example:
        INVOICE_TRANSITIONS = TransitionTable(
            InvoiceStatus,
            {
                InvoiceStatus.DRAFT: {InvoiceStatus.PENDING},
                InvoiceStatus.PENDING: set(),
            },
        )

    Raises:
        ValueError: If a status has no entry, or an entry names a value
            outside the enumeration.
    """

    def __init__(
        self,
        status_type: type[StatusT],
        transitions: Mapping[StatusT, Iterable[StatusT]],
    ) -> None:
        members = frozenset(status_type)

        unknown = [s for s in transitions if s not in members]
        if unknown:
            raise ValueError(
                f"Transition table for {status_type.__name__} has unknown "
                f"source statuses: {unknown}"
            )

        missing = [s for s in status_type if s not in transitions]
        if missing:
            raise ValueError(
                f"Transition table for {status_type.__name__} is missing "
                f"entries for: {[s.value for s in missing]}"
            )

        table: dict[StatusT, frozenset[StatusT]] = {}
        for source, targets in transitions.items():
            allowed = frozenset(targets)
            foreign = [t for t in allowed if t not in members]
            if foreign:
                raise ValueError(
                    f"Transition table for {status_type.__name__} maps "
                    f"{source.value} to unknown statuses: {foreign}"
                )
            table[source] = allowed

        self._status_type = status_type
        self._table = MappingProxyType(table)

    @property
    def status_type(self) -> type[StatusT]:
        """The enumeration this table governs."""
        return self._status_type

    @property
    def states(self) -> frozenset[StatusT]:
        """All statuses in the enumeration."""
        return frozenset(self._table)

    @property
    def terminal_states(self) -> frozenset[StatusT]:
        """Statuses with no outgoing transitions."""
        return frozenset(s for s, allowed in self._table.items() if not allowed)

    def allowed_from(self, status: StatusT) -> frozenset[StatusT]:
        """Return the statuses reachable in one step from ``status``."""
        return self._table[status]

    def can_transition(self, source: StatusT, target: StatusT) -> bool:
        """Check whether ``source`` may move directly to ``target``."""
        return target in self._table.get(source, frozenset())

    def is_terminal(self, status: StatusT) -> bool:
        """Check whether ``status`` has no outgoing transitions."""
        return not self._table[status]

    def __contains__(self, status: object) -> bool:
        return status in self._table

    def __repr__(self) -> str:
        edges = {s.value: sorted(t.value for t in a) for s, a in self._table.items()}
        return f"TransitionTable({self._status_type.__name__}, {edges})"
