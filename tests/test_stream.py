import pytest

from confluence import CombinatorConfig, PolledAfterCompletionError, from_iterable, join_stream, merge

from fakes import CountingWaker, FakeStream, PENDING, drain


def test_left_then_right_then_end() -> None:
    waker = CountingWaker()
    merged = join_stream(FakeStream([1]), FakeStream([2]))

    assert merged.poll_next(waker).value == 1
    # left produced, so the merge asked to be polled again
    assert waker.count == 1
    assert merged.poll_next(waker).value == 2
    assert merged.poll_next(waker).is_exhausted


def test_left_bias_without_loss_or_duplication() -> None:
    items = drain(join_stream(from_iterable([1, 2]), from_iterable([3])), CountingWaker())
    assert items[0] == 1
    assert sorted(items) == [1, 2, 3]


def test_right_served_while_left_pending() -> None:
    waker = CountingWaker()
    merged = join_stream(FakeStream([PENDING, 1]), FakeStream([2]))

    assert merged.poll_next(waker).value == 2
    assert merged.poll_next(waker).value == 1
    assert merged.poll_next(waker).is_exhausted


def test_right_exhaustion_alone_does_not_end_merge() -> None:
    waker = CountingWaker()
    left = FakeStream([PENDING, PENDING, 5])
    right = FakeStream([])
    merged = join_stream(left, right)

    assert merged.poll_next(waker).is_pending
    assert merged.right_exhausted
    assert merged.poll_next(waker).is_pending
    assert merged.poll_next(waker).value == 5
    assert merged.poll_next(waker).is_exhausted
    assert right.polls == 1


def test_exhausted_sides_are_not_polled_again() -> None:
    left = FakeStream([1])
    right = FakeStream([PENDING, PENDING, 2])
    items = drain(join_stream(left, right), CountingWaker())
    assert items == [1, 2]
    assert left.polls_after_exhausted == 0
    assert right.polls_after_exhausted == 0


def test_unfair_merge_does_not_wake() -> None:
    waker = CountingWaker()
    merged = join_stream(FakeStream([1]), FakeStream([]), config=CombinatorConfig(fair_merge=False))
    assert merged.poll_next(waker).value == 1
    assert waker.count == 0


def test_poll_after_exhausted_raises() -> None:
    merged = join_stream(FakeStream([]), FakeStream([]))
    waker = CountingWaker()
    assert merged.poll_next(waker).is_exhausted
    with pytest.raises(PolledAfterCompletionError):
        merged.poll_next(waker)


class TestMerge:
    """N-ary merge built by left-folding join_stream."""

    def test_three_streams_in_left_fold_order(self):
        merged = merge(from_iterable("a"), from_iterable("b"), from_iterable("c"))
        assert drain(merged, CountingWaker()) == ["a", "b", "c"]

    def test_leftmost_preferred(self):
        merged = merge(from_iterable([1, 2]), from_iterable([10]), from_iterable([20]))
        items = drain(merged, CountingWaker())
        assert items[:2] == [1, 2]
        assert sorted(items) == [1, 2, 10, 20]

    def test_single_stream_returned_unchanged(self):
        stream = FakeStream([1])
        assert merge(stream) is stream

    def test_requires_streams(self):
        with pytest.raises(ValueError):
            merge()
