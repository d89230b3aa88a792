from .combinators import join, join_stream, merge, select, try_join, try_select
from .config import CombinatorConfig
from .kernel import (
    CombinatorError,
    CompletionCell,
    ContractViolation,
    Poll,
    PolledAfterCompletionError,
    PolledAfterTakenError,
    Result,
    Trace,
    Waker,
    maybe_done,
)
from .runtime import (
    drive,
    from_async_iterator,
    from_awaitable,
    from_iterable,
    iterate,
    pending,
    poll_fn,
    ready,
)

__all__ = [
    # Core
    "Poll",
    "Waker",
    "Result",
    "CompletionCell",
    "maybe_done",
    # Combinators
    "join",
    "try_join",
    "select",
    "try_select",
    "join_stream",
    "merge",
    "CombinatorConfig",
    # Tracing
    "Trace",
    # Runtime
    "drive",
    "iterate",
    "from_awaitable",
    "from_async_iterator",
    "from_iterable",
    "poll_fn",
    "ready",
    "pending",
    # Errors
    "CombinatorError",
    "ContractViolation",
    "PolledAfterCompletionError",
    "PolledAfterTakenError",
]
