"""Shared machinery for combinators: drive guard, tracing, cell polling."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from confluence.config import DEFAULT_CONFIG, CombinatorConfig
from confluence.kernel.cell import CompletionCell, cells_of
from confluence.kernel.errors import PolledAfterCompletionError
from confluence.kernel.poll import Poll, Pollable, Waker
from confluence.kernel.trace import Trace

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Driven(ABC):
    """Base for anything driven by an external poll loop.

    Holds the config and optional trace, and remembers whether the final
    value has been produced. Instances are single-owner: they must not be
    driven from two threads at once.
    """

    kind: ClassVar[str] = "driven"

    def __init__(self, config: CombinatorConfig | None = None, trace: Trace | None = None) -> None:
        self.config = config if config is not None else DEFAULT_CONFIG
        self.trace = trace
        self._finished = False

    @abstractmethod
    def _drive(self, waker: Waker) -> Poll[Any]:
        """Run one pass over the sources and return its outcome."""
        pass

    @property
    def label(self) -> str:
        return self.config.label or self.kind

    @property
    def finished(self) -> bool:
        return self._finished

    def _check_not_finished(self) -> None:
        if self._finished:
            raise PolledAfterCompletionError(
                f"{self.kind} polled after completion", label=self.label
            )

    def _begin_drive(self) -> int | None:
        if self.trace is None:
            return None
        drive_id = self.trace.record("drive_begin", info={"combinator": self.label})
        if drive_id is not None:
            self.trace.push(drive_id)
        return drive_id

    def _leave_drive(self, drive_id: int | None) -> None:
        if self.trace is not None and drive_id is not None:
            self.trace.pop()

    def _end_drive(self, drive_id: int | None, outcome: Poll[Any]) -> None:
        if self.trace is None or drive_id is None:
            return
        self.trace.record(
            "drive_end",
            info={"combinator": self.label, "poll": outcome.kind},
            parent_id=drive_id,
        )


class Combinator(Driven, Generic[T]):
    """A pollable built from a fixed, ordered list of completion cells.

    Declaration order of the sources is the tie-break rule for every
    subclass. Subclasses implement _drive(), which polls cells through
    _poll_cell() and returns the combined outcome of one pass.
    """

    kind: ClassVar[str] = "combinator"
    min_sources: ClassVar[int] = 0

    def __init__(
        self,
        pollables: tuple[Pollable[Any], ...],
        config: CombinatorConfig | None = None,
        trace: Trace | None = None,
    ) -> None:
        super().__init__(config, trace)
        if len(pollables) < self.min_sources:
            raise ValueError(f"{self.kind} requires at least {self.min_sources} pollable(s)")
        self._cells: list[CompletionCell[Any]] = cells_of(pollables, self.config.label)

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def cells(self) -> tuple[CompletionCell[Any], ...]:
        return tuple(self._cells)

    def poll(self, waker: Waker) -> Poll[T]:
        """Drive every source once and report the combined outcome.

        Raises:
            PolledAfterCompletionError: the final value was already returned.
        """
        self._check_not_finished()
        drive_id = self._begin_drive()
        try:
            outcome = self._drive(waker)
        finally:
            self._leave_drive(drive_id)
        self._end_drive(drive_id, outcome)

        if outcome.is_ready:
            self._finished = True
            # Remaining sources are abandoned: released without further polls.
            self._cells = []
            logger.debug("%s resolved", self.label)
        return outcome

    def _poll_cell(self, index: int, waker: Waker) -> bool:
        cell = self._cells[index]
        was_running = cell.is_running
        done = cell.poll_into_completion(waker)
        if done and was_running and self.trace is not None:
            self.trace.record("cell_ready", info={"combinator": self.label, "index": index})
        return done

    def __repr__(self) -> str:
        states = [c.state for c in self._cells]
        return f"{type(self).__name__}(label={self.label!r}, finished={self._finished}, cells={states})"
