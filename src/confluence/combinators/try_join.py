"""try_join - join for fallible pollables, failing fast."""

from __future__ import annotations

from typing import Any, ClassVar

from confluence.combinators.types import Combinator
from confluence.kernel.poll import Poll, Waker
from confluence.kernel.result import Result


def expect_result(value: Any, label: str | None) -> Result[Any, Any]:
    """Check that a fallible source completed with a Result."""
    if not isinstance(value, Result):
        raise TypeError(
            f"Source {label} of a fallible combinator completed with "
            f"{type(value).__name__}, expected Result"
        )
    return value


class TryJoinAll(Combinator[Result[tuple[Any, ...], Any]]):
    """Like JoinAll, but for pollables whose output is a Result.

    The pass stops at the first cell found holding an error, and that error
    becomes the output; cells after it are not polled in that pass. Ties
    between failures completing in the same pass go to the earlier declared
    cell. If every cell succeeds, the output is Ok of the tuple of values.
    """

    kind: ClassVar[str] = "try_join"

    def _drive(self, waker: Waker) -> Poll[Result[tuple[Any, ...], Any]]:
        all_done = True
        for index, cell in enumerate(self._cells):
            if not self._poll_cell(index, waker):
                all_done = False
            elif expect_result(cell.peek(), cell.label).is_err:
                return Poll.Ready(Result.Err(cell.take().error))  # type: ignore[union-attr]

        if not all_done:
            return Poll.Pending()
        values = tuple(cell.take().value for cell in self._cells)  # type: ignore[union-attr]
        return Poll.Ready(Result.Ok(values))
