"""Runtime layer - asyncio bridge and ready-made sources."""

from confluence.runtime.bridge import (
    AsyncIteratorStream,
    AwaitablePollable,
    drive,
    from_async_iterator,
    from_awaitable,
    iterate,
)
from confluence.runtime.sources import from_iterable, pending, poll_fn, ready

__all__ = [
    "drive",
    "iterate",
    "from_awaitable",
    "from_async_iterator",
    "AwaitablePollable",
    "AsyncIteratorStream",
    "poll_fn",
    "ready",
    "pending",
    "from_iterable",
]
