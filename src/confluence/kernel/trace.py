"""Drive trace - an optional event log of combinator polls.

Trace is runtime infrastructure: it records what each drive call observed
and never influences the outcome of a poll. Nested combinators sharing one
Trace nest their events through push/pop, and tree relationships are
reconstructed only on demand via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """One recorded drive event.

    Attributes:
        action: What happened ("drive_begin", "cell_ready", "drive_end", ...)
        id: Sequential event id within its Trace
        parent_id: Id of the enclosing event, if any
        timestamp: When the event was recorded (UTC)
        info: Event details (combinator label, cell index, poll kind)
    """

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Append-only log of drive events.

    Uses stack-based nesting via push/pop so that a combinator driven from
    inside another combinator's drive records its events as children.
    Single-owner, like the combinators that write to it.

    Performance guarantees:
    - Trace disabled -> single flag check
    - Event append is O(1)
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Make event_id the parent of events recorded by nested drives."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Leave the current drive; returns its event id, or None if not nested."""
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
    ) -> int | None:
        """Record an event.

        Args:
            action: What happened
            info: Additional context
            parent_id: Explicit parent event; defaults to the top of the stack

        Returns:
            Event id for linking child events, or None if tracing is disabled
        """
        if not self.enabled:
            return None

        if parent_id is not None:
            effective_parent = parent_id
        elif self._stack:
            effective_parent = self._stack[-1]
        else:
            effective_parent = None

        event_id = self._next_id
        self._next_id += 1

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=effective_parent,
                timestamp=datetime.now(UTC),
                info=info or {},
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events."""
        return list(self._events)

    def find_all(self, action: str | None = None, **info: Any) -> list[Evidence]:
        """Events matching an action and/or info key-value pairs."""
        return [
            ev
            for ev in self._events
            if (action is None or ev.action == action)
            and all(ev.info.get(k) == v for k, v in info.items())
        ]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent id to the ids of its child events."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def outcomes(self, combinator: str) -> list[str]:
        """Poll kinds returned by each recorded drive of one combinator, in order.

        Args:
            combinator: The combinator label (its config label, or its kind)

        Returns:
            e.g. ["pending", "pending", "ready"]
        """
        return [ev.info["poll"] for ev in self.find_all("drive_end", combinator=combinator)]

    def ready_cells(self, combinator: str) -> list[int]:
        """Declaration indexes of cells in the order they were seen completing."""
        return [ev.info["index"] for ev in self.find_all("cell_ready", combinator=combinator)]

    def __len__(self) -> int:
        return len(self._events)
