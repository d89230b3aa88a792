"""select - the first pollable to complete wins."""

from __future__ import annotations

from typing import ClassVar, TypeVar

from confluence.combinators.types import Combinator
from confluence.kernel.poll import Poll, Waker

T = TypeVar("T")


class SelectFirst(Combinator[T]):
    """Ready with the output of whichever source completes first.

    Cells are polled in declaration order and the pass stops at the first
    completed one, so a tie within one pass goes to the earlier declared
    source. The other sources are dropped without being polled again.
    """

    kind: ClassVar[str] = "select"
    min_sources: ClassVar[int] = 1

    def _drive(self, waker: Waker) -> Poll[T]:
        for index, cell in enumerate(self._cells):
            if self._poll_cell(index, waker):
                return Poll.Ready(cell.take())

        return Poll.Pending()
