"""asyncio bridge - asyncio as the substrate that drives pollables.

Nothing here schedules work of its own. Wakes are translated into event
loop callbacks, and asyncio awaitables are exposed through the poll
protocol so they can be combined.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable
from typing import Any, Generic, TypeVar

from confluence.kernel.errors import PolledAfterCompletionError
from confluence.kernel.poll import Poll, Pollable, PollStream, Waker
from confluence.kernel.result import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

_END = object()


class AwaitablePollable(Generic[T]):
    """An asyncio awaitable seen through the poll protocol.

    The awaitable is scheduled as a task on the first poll. The most recent
    waker is woken once when the task finishes. Dropping this object does
    not cancel a task that is already running; call cancel() for that.
    A coroutine that was never scheduled (for instance, the loser of a
    select that finished before reaching it) is closed by cancel() or when
    the pollable is released, so it never runs.

    With capture=True the output is a Result: the task's return value as
    Ok, or its exception (including cancellation) as Err.
    """

    def __init__(self, awaitable: Awaitable[T], capture: bool = False) -> None:
        self._awaitable = awaitable
        self._capture = capture
        self._task: asyncio.Future[T] | None = None
        self._waker: Waker | None = None
        self._completed = False
        self._discarded = False

    @property
    def task(self) -> asyncio.Future[T] | None:
        return self._task

    def poll(self, waker: Waker) -> Poll[Any]:
        if self._completed:
            raise PolledAfterCompletionError("awaitable polled after completion", label="awaitable")
        if self._discarded:
            self._completed = True
            if self._capture:
                return Poll.Ready(Result.Err(asyncio.CancelledError()))
            raise asyncio.CancelledError()
        if self._task is None:
            self._task = asyncio.ensure_future(self._awaitable)
            self._task.add_done_callback(self._on_done)

        if not self._task.done():
            self._waker = waker
            return Poll.Pending()

        self._completed = True
        self._waker = None
        return Poll.Ready(self._output(self._task))

    def cancel(self) -> bool:
        """Cancel the underlying task, or discard the awaitable if never scheduled.

        A discarded awaitable completes as cancelled if it is polled later.
        """
        if self._task is None:
            return self._discard_unscheduled()
        if self._task.done():
            return False
        return self._task.cancel()

    def _discard_unscheduled(self) -> bool:
        if self._task is not None or self._discarded:
            return False
        self._discarded = True
        if inspect.iscoroutine(self._awaitable):
            self._awaitable.close()
        return True

    def __del__(self) -> None:
        self._discard_unscheduled()

    def _on_done(self, _: asyncio.Future[T]) -> None:
        if self._waker is not None:
            waker, self._waker = self._waker, None
            waker.wake()

    def _output(self, task: asyncio.Future[T]) -> Any:
        if not self._capture:
            return task.result()
        if task.cancelled():
            return Result.Err(asyncio.CancelledError())
        exc = task.exception()
        if exc is not None:
            return Result.Err(exc)
        return Result.Ok(task.result())


def from_awaitable(awaitable: Awaitable[T], *, capture: bool = False) -> AwaitablePollable[T]:
    """Wrap a coroutine, task or future as a pollable.

    Must be polled from inside a running event loop.
    """
    return AwaitablePollable(awaitable, capture=capture)


class AsyncIteratorStream(Generic[T]):
    """An async iterator seen through the poll-stream protocol.

    At most one __anext__ call is in flight at a time, run as a task.
    Once the iterator is exhausted the stream keeps reporting Exhausted.
    """

    def __init__(self, iterable: AsyncIterable[T]) -> None:
        self._iterator: AsyncIterator[T] | None = aiter(iterable)
        self._task: asyncio.Task[Any] | None = None
        self._waker: Waker | None = None

    def poll_next(self, waker: Waker) -> Poll[T]:
        if self._iterator is None:
            return Poll.Exhausted()
        if self._task is None:
            self._task = asyncio.ensure_future(self._next_item(self._iterator))
            self._task.add_done_callback(self._on_done)

        if not self._task.done():
            self._waker = waker
            return Poll.Pending()

        task, self._task = self._task, None
        item = task.result()
        if item is _END:
            self._iterator = None
            return Poll.Exhausted()
        return Poll.Ready(item)

    @staticmethod
    async def _next_item(iterator: AsyncIterator[T]) -> Any:
        try:
            return await anext(iterator)
        except StopAsyncIteration:
            return _END

    def _on_done(self, _: asyncio.Task[Any]) -> None:
        if self._waker is not None:
            waker, self._waker = self._waker, None
            waker.wake()


def from_async_iterator(iterable: AsyncIterable[T]) -> AsyncIteratorStream[T]:
    """Wrap an async iterable as a poll-stream."""
    return AsyncIteratorStream(iterable)


def _loop_waker(loop: asyncio.AbstractEventLoop, woken: asyncio.Event) -> Waker:
    return Waker(lambda: loop.call_soon_threadsafe(woken.set))


async def drive(pollable: Pollable[T]) -> T:
    """Drive a pollable on the running event loop until it is ready.

    The pollable is polled once, then again each time its waker fires.
    Spurious wakes only cost an extra poll.
    """
    loop = asyncio.get_running_loop()
    woken = asyncio.Event()
    waker = _loop_waker(loop, woken)
    polls = 0
    while True:
        woken.clear()
        outcome = pollable.poll(waker)
        polls += 1
        if outcome.is_ready:
            logger.debug("drive(%r) ready after %d polls", pollable, polls)
            return outcome.value  # type: ignore[return-value]
        await woken.wait()


async def iterate(stream: PollStream[T]) -> AsyncIterator[T]:
    """Drive a poll-stream on the running event loop, yielding its items."""
    loop = asyncio.get_running_loop()
    woken = asyncio.Event()
    waker = _loop_waker(loop, woken)
    while True:
        woken.clear()
        outcome = stream.poll_next(waker)
        if outcome.is_exhausted:
            return
        if outcome.is_ready:
            yield outcome.value  # type: ignore[misc]
            continue
        await woken.wait()
