"""join_stream - left-biased merge of poll-streams."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, ClassVar, Generic, TypeVar

from confluence.combinators.types import Driven
from confluence.config import CombinatorConfig
from confluence.kernel.poll import Poll, PollStream, Waker
from confluence.kernel.trace import Trace

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JoinStream(Driven, Generic[T]):
    """A stream joining two streams.

    Each drive call yields at most one item. The left stream is asked
    first; when it yields, the merge wakes itself so the right stream is
    reached on a following drive even if the left keeps producing. The
    merged stream is exhausted only once both sides are.
    """

    kind: ClassVar[str] = "join_stream"

    def __init__(
        self,
        left: PollStream[T],
        right: PollStream[T],
        config: CombinatorConfig | None = None,
        trace: Trace | None = None,
    ) -> None:
        super().__init__(config, trace)
        self._left: PollStream[T] | None = left
        self._right: PollStream[T] | None = right

    @property
    def left_exhausted(self) -> bool:
        return self._left is None

    @property
    def right_exhausted(self) -> bool:
        return self._right is None

    def poll_next(self, waker: Waker) -> Poll[T]:
        """Poll for the next merged item.

        Raises:
            PolledAfterCompletionError: Exhausted was already returned.
        """
        self._check_not_finished()
        drive_id = self._begin_drive()
        try:
            outcome = self._drive(waker)
        finally:
            self._leave_drive(drive_id)
        self._end_drive(drive_id, outcome)

        if outcome.is_exhausted:
            self._finished = True
            logger.debug("%s exhausted", self.label)
        return outcome

    def _drive(self, waker: Waker) -> Poll[T]:
        if self._left is not None:
            item = self._left.poll_next(waker)
            if item.is_ready:
                if self.config.fair_merge:
                    # Left made progress; come back to check the right side.
                    waker.wake()
                return item
            if item.is_exhausted:
                logger.debug("%s: left side exhausted", self.label)
                self._left = None

        if self._right is not None:
            item = self._right.poll_next(waker)
            if item.is_ready:
                return item
            if item.is_exhausted:
                logger.debug("%s: right side exhausted", self.label)
                self._right = None

        if self._left is None and self._right is None:
            return Poll.Exhausted()
        return Poll.Pending()

    def __repr__(self) -> str:
        return (
            f"JoinStream(label={self.label!r}, left_exhausted={self.left_exhausted}, "
            f"right_exhausted={self.right_exhausted})"
        )


def merge_all(
    streams: tuple[PollStream[Any], ...],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> PollStream[Any]:
    """Left-fold JoinStream over two or more streams.

    The leftmost stream is preferred at every step. A single stream is
    returned as is.
    """
    if not streams:
        raise ValueError("merge requires at least one stream")
    return reduce(lambda acc, s: JoinStream(acc, s, config=config, trace=trace), streams)
