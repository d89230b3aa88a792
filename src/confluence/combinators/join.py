"""join - wait for every pollable and collect all outputs."""

from __future__ import annotations

from typing import Any, ClassVar

from confluence.combinators.types import Combinator
from confluence.kernel.poll import Poll, Waker


class JoinAll(Combinator[tuple[Any, ...]]):
    """Drives N pollables concurrently; ready with a tuple of all outputs.

    Every cell is polled on every drive call, since a cell that already
    completed is a no-op to poll. The output tuple follows declaration
    order regardless of the order in which sources completed.
    """

    kind: ClassVar[str] = "join"

    def _drive(self, waker: Waker) -> Poll[tuple[Any, ...]]:
        all_done = True
        for index in range(len(self._cells)):
            all_done &= self._poll_cell(index, waker)

        if not all_done:
            return Poll.Pending()
        return Poll.Ready(tuple(cell.take() for cell in self._cells))
