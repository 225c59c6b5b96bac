"""
Diff — classify key/value changes between two documents.

Only the keyed view of each document is compared (through
``for_each_property``); comments, blank lines and line positions are
ignored.

Event order:

1. One event per property of *right*, in *right*'s sequence order:
   ``MODIFIED`` or ``SAME`` for keys also in *left*, ``ADDED`` otherwise.
2. ``REMOVED`` for every key only in *left*, in *left*'s sequence order.

``SAME`` events are emitted by default so that a consumer sees every key
of the union exactly once.  Pass ``include_same=False`` to get only the
changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from core.document import PropertiesDocument


class ChangeType(Enum):
    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"
    SAME = "same"


_INVERSE = {
    ChangeType.MODIFIED: ChangeType.MODIFIED,
    ChangeType.ADDED: ChangeType.REMOVED,
    ChangeType.REMOVED: ChangeType.ADDED,
    ChangeType.SAME: ChangeType.SAME,
}


@dataclass(frozen=True, slots=True)
class DiffEvent:
    """One classified key.  The value on a missing side is ``""``."""
    change_type: ChangeType
    key: str
    left_value: str = ""
    right_value: str = ""

    def inverted(self) -> DiffEvent:
        """The event ``diff(right, left)`` reports for the same key."""
        return DiffEvent(_INVERSE[self.change_type], self.key,
                         self.right_value, self.left_value)


def diff(
    left: PropertiesDocument,
    right: PropertiesDocument,
    handler: Callable[[DiffEvent], None],
    *,
    include_same: bool = True,
) -> None:
    """Compare *left* to *right*, calling *handler* once per event."""
    remaining: dict[str, str] = {}

    def snapshot(key: str, value: str) -> None:
        remaining[key] = value

    left.for_each_property(snapshot)

    def compare(key: str, value: str) -> None:
        if key in remaining:
            left_value = remaining.pop(key)
            if left_value != value:
                handler(DiffEvent(ChangeType.MODIFIED, key, left_value, value))
            elif include_same:
                handler(DiffEvent(ChangeType.SAME, key, left_value, value))
        else:
            handler(DiffEvent(ChangeType.ADDED, key, "", value))

    right.for_each_property(compare)

    for key, value in remaining.items():
        handler(DiffEvent(ChangeType.REMOVED, key, value, ""))


def diff_events(
    left: PropertiesDocument,
    right: PropertiesDocument,
    *,
    include_same: bool = True,
) -> list[DiffEvent]:
    """Collect the events of :func:`diff` into a list."""
    events: list[DiffEvent] = []
    diff(left, right, events.append, include_same=include_same)
    return events
