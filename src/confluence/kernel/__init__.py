"""Kernel layer - poll protocol, completion cells, and shared value types."""

from confluence.kernel.cell import CompletionCell, maybe_done
from confluence.kernel.errors import (
    CombinatorError,
    ContractViolation,
    PolledAfterCompletionError,
    PolledAfterTakenError,
)
from confluence.kernel.poll import Poll, Pollable, PollStream, Waker, noop_waker
from confluence.kernel.result import Result
from confluence.kernel.trace import Evidence, Trace

__all__ = [
    "Poll",
    "Pollable",
    "PollStream",
    "Waker",
    "noop_waker",
    "Result",
    "CompletionCell",
    "maybe_done",
    # Errors
    "CombinatorError",
    "ContractViolation",
    "PolledAfterCompletionError",
    "PolledAfterTakenError",
    # Tracing
    "Evidence",
    "Trace",
]
