"""Poll outcome, waker, and the pollable protocols every combinator speaks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, TypeVar

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True)
class Poll(Generic[T]):
    """
    Outcome of a single poll.

    Kinds:
    - ready: the computation produced a value (or a stream produced an item)
    - pending: not yet; the waker passed to poll will be woken later
    - exhausted: a stream has no more items (only returned by poll_next)
    """

    kind: Literal["ready", "pending", "exhausted"]
    value: T | None = None

    @staticmethod
    def Ready(value: Any) -> Poll[Any]:
        return Poll(kind="ready", value=value)

    @staticmethod
    def Pending() -> Poll[Any]:
        return _PENDING

    @staticmethod
    def Exhausted() -> Poll[Any]:
        return _EXHAUSTED

    @property
    def is_ready(self) -> bool:
        return self.kind == "ready"

    @property
    def is_pending(self) -> bool:
        return self.kind == "pending"

    @property
    def is_exhausted(self) -> bool:
        return self.kind == "exhausted"


_PENDING: Poll[Any] = Poll(kind="pending")
_EXHAUSTED: Poll[Any] = Poll(kind="exhausted")


class Waker:
    """Handle a pollable uses to ask its driver for another poll.

    Waking is idempotent from the driver's point of view: extra wakes only
    cause an extra poll that may find Pending again.
    """

    __slots__ = ("_callback",)

    def __init__(self, callback: Callable[[], None] | None = None) -> None:
        self._callback = callback

    def wake(self) -> None:
        """Request that the owning pollable be driven again."""
        if self._callback is not None:
            self._callback()

    def __repr__(self) -> str:
        return f"Waker({self._callback!r})"


def noop_waker() -> Waker:
    """A waker that ignores wake requests (for polling by hand)."""
    return Waker()


class Pollable(Protocol[T_co]):
    """Anything that can be polled once for a value.

    After returning Ready, a pollable must not be polled again.
    """

    def poll(self, waker: Waker) -> Poll[T_co]:
        ...


class PollStream(Protocol[T_co]):
    """An asynchronous sequence polled one item at a time."""

    def poll_next(self, waker: Waker) -> Poll[T_co]:
        ...
