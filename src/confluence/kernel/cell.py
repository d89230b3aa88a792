"""A wrapper that keeps track of one pollable's completion status."""

from __future__ import annotations

import logging
from typing import Any, Generic, Literal, TypeVar

from confluence.kernel.errors import PolledAfterTakenError
from confluence.kernel.poll import Pollable, Waker

logger = logging.getLogger(__name__)

T = TypeVar("T")

CellState = Literal["running", "completed", "consumed"]


class CompletionCell(Generic[T]):
    """A pollable that may have completed.

    States only move forward:
    - running: the inner pollable has not produced a value yet
    - completed: the value is held and has not been taken
    - consumed: the value was moved out by take()

    Once the inner pollable is ready it is released and never polled again.
    A cell is owned by exactly one combinator.
    """

    __slots__ = ("_state", "_slot", "label")

    def __init__(self, pollable: Pollable[T], label: str | None = None) -> None:
        self._state: CellState = "running"
        # Holds the pollable while running, then the value until taken.
        self._slot: Any = pollable
        self.label = label

    @property
    def state(self) -> CellState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == "running"

    @property
    def is_completed(self) -> bool:
        return self._state == "completed"

    @property
    def is_consumed(self) -> bool:
        return self._state == "consumed"

    def poll_into_completion(self, waker: Waker) -> bool:
        """Drive the inner pollable once if it is still running.

        Returns:
            True if the cell holds (or held) a value after this call.

        Raises:
            PolledAfterTakenError: the value has already been taken.
        """
        if self._state == "completed":
            return True
        if self._state == "consumed":
            raise PolledAfterTakenError(
                "CompletionCell polled after value taken", label=self.label
            )

        outcome = self._slot.poll(waker)
        if outcome.is_pending:
            return False

        self._slot = outcome.value
        self._state = "completed"
        logger.debug("Cell %s completed", self.label or hex(id(self)))
        return True

    def peek(self) -> T | None:
        """The held value if completed, else None. Does not change state."""
        if self._state == "completed":
            return self._slot
        return None

    def take(self) -> T | None:
        """Move the value out without driving the cell.

        Returns the value only if the cell is completed; any other state,
        including a second take(), yields None and leaves the state as is.
        """
        if self._state != "completed":
            return None
        value = self._slot
        self._slot = None
        self._state = "consumed"
        return value

    def __repr__(self) -> str:
        return f"CompletionCell(state={self._state!r}, label={self.label!r})"


def maybe_done(pollable: Pollable[T], label: str | None = None) -> CompletionCell[T]:
    """Wrap a pollable in a new CompletionCell."""
    return CompletionCell(pollable, label=label)


def cells_of(pollables: tuple[Pollable[Any], ...], label: str | None) -> list[CompletionCell[Any]]:
    """Wrap sources in cells labelled by their declaration index."""
    prefix = label or "cell"
    return [maybe_done(p, label=f"{prefix}[{i}]") for i, p in enumerate(pollables)]
