"""try_select - the first successful pollable wins."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from confluence.combinators.try_join import expect_result
from confluence.combinators.types import Combinator
from confluence.kernel.poll import Poll, Waker
from confluence.kernel.result import Result

logger = logging.getLogger(__name__)


class TrySelectFirst(Combinator[Result[Any, Any]]):
    """Ready with the first Ok among fallible sources.

    Unlike SelectFirst, a pass does not stop at a completed cell that
    failed: every cell is polled so that a later source can still succeed.
    When every source has failed, one of the failures is reported, chosen by
    config.error_policy ("first" or "last" in declaration order).
    """

    kind: ClassVar[str] = "try_select"
    min_sources: ClassVar[int] = 1

    def _drive(self, waker: Waker) -> Poll[Result[Any, Any]]:
        all_done = True
        for index, cell in enumerate(self._cells):
            if not self._poll_cell(index, waker):
                all_done = False
            elif expect_result(cell.peek(), cell.label).is_ok:
                return Poll.Ready(cell.take())

        if not all_done:
            return Poll.Pending()

        logger.debug("%s: all %d sources failed", self.label, len(self._cells))
        return Poll.Ready(self._collect_error())

    def _collect_error(self) -> Result[Any, Any]:
        # Every cell is complete and holds an Err here.
        cell = self._cells[-1] if self.config.error_policy == "last" else self._cells[0]
        return expect_result(cell.take(), cell.label)
