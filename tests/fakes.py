from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from confluence.kernel import Poll, Waker

# Script step meaning "not ready on this poll".
PENDING = object()


class CountingWaker(Waker):
    def __init__(self) -> None:
        self.count = 0
        super().__init__(self._bump)

    def _bump(self) -> None:
        self.count += 1


@dataclass
class FakePollable:
    """Pollable that follows a script, one step per poll.

    Each step is PENDING or the output value. An exhausted script stays
    pending forever. Polling after completion fails the test.
    """

    steps: list[Any] = field(default_factory=list)
    name: str = ""
    polls: int = 0
    done: bool = False

    def poll(self, waker: Waker) -> Poll[Any]:
        assert not self.done, f"{self.name or 'pollable'} polled after completion"
        self.polls += 1
        if not self.steps:
            return Poll.Pending()
        step = self.steps.pop(0)
        if step is PENDING:
            return Poll.Pending()
        self.done = True
        return Poll.Ready(step)


def ready_now(value: Any, name: str = "") -> FakePollable:
    return FakePollable([value], name=name)


def ready_after(pending_polls: int, value: Any, name: str = "") -> FakePollable:
    return FakePollable([PENDING] * pending_polls + [value], name=name)


def never(name: str = "") -> FakePollable:
    return FakePollable([], name=name)


@dataclass
class FakeStream:
    """Poll-stream that follows a script of items and PENDING steps.

    Once the script is used up the stream reports Exhausted. Polling an
    exhausted stream again is counted so tests can assert it never happens.
    """

    steps: list[Any] = field(default_factory=list)
    polls: int = 0
    polls_after_exhausted: int = 0
    exhausted: bool = False

    def poll_next(self, waker: Waker) -> Poll[Any]:
        self.polls += 1
        if self.exhausted:
            self.polls_after_exhausted += 1
            return Poll.Exhausted()
        if not self.steps:
            self.exhausted = True
            return Poll.Exhausted()
        step = self.steps.pop(0)
        if step is PENDING:
            return Poll.Pending()
        return Poll.Ready(step)


def drain(stream: Any, waker: Waker, max_polls: int = 100) -> list[Any]:
    """Poll a stream until Exhausted, collecting items."""
    items: list[Any] = []
    for _ in range(max_polls):
        outcome = stream.poll_next(waker)
        if outcome.is_exhausted:
            return items
        if outcome.is_ready:
            items.append(outcome.value)
    raise AssertionError(f"stream not exhausted after {max_polls} polls")


def drive_by_hand(pollable: Any, waker: Waker, max_polls: int = 100) -> tuple[Any, int]:
    """Poll until Ready; returns the value and the number of polls."""
    for n in range(1, max_polls + 1):
        outcome = pollable.poll(waker)
        if outcome.is_ready:
            return outcome.value, n
    raise AssertionError(f"pollable not ready after {max_polls} polls")
