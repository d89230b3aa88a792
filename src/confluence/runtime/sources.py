"""Small ready-made pollables and poll-streams."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from confluence.kernel.errors import PolledAfterCompletionError
from confluence.kernel.poll import Poll, Waker

T = TypeVar("T")


class PollFn(Generic[T]):
    """A pollable whose poll is a plain function of the waker."""

    def __init__(self, fn: Callable[[Waker], Poll[T]]) -> None:
        self._fn = fn

    def poll(self, waker: Waker) -> Poll[T]:
        return self._fn(waker)


def poll_fn(fn: Callable[[Waker], Poll[T]]) -> PollFn[T]:
    """Create a pollable from a function returning Poll."""
    return PollFn(fn)


class Ready(Generic[T]):
    """Immediately ready with a value; may be polled only once."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._taken = False

    def poll(self, waker: Waker) -> Poll[T]:
        if self._taken:
            raise PolledAfterCompletionError("Ready polled after completion", label="ready")
        self._taken = True
        return Poll.Ready(self._value)


class Pending:
    """Never completes and never wakes."""

    def poll(self, waker: Waker) -> Poll[Any]:
        return Poll.Pending()


def ready(value: T) -> Ready[T]:
    return Ready(value)


def pending() -> Pending:
    return Pending()


class IterStream(Generic[T]):
    """A poll-stream over a synchronous iterable; every item is ready."""

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iterator: Iterator[T] | None = iter(iterable)

    def poll_next(self, waker: Waker) -> Poll[T]:
        if self._iterator is None:
            return Poll.Exhausted()
        try:
            return Poll.Ready(next(self._iterator))
        except StopIteration:
            self._iterator = None
            return Poll.Exhausted()


def from_iterable(iterable: Iterable[T]) -> IterStream[T]:
    return IterStream(iterable)
