import pytest

from confluence import Poll, Result, select
from confluence.kernel import noop_waker

from fakes import ready_now


def test_result_ok():
    result = Result.Ok(3)
    assert result.is_ok and not result.is_err
    assert result.unwrap() == 3
    with pytest.raises(ValueError):
        result.unwrap_err()


def test_result_err():
    result = Result.Err("bad")
    assert result.is_err
    assert result.unwrap_err() == "bad"
    with pytest.raises(ValueError, match="bad"):
        result.unwrap()


def test_poll_kinds():
    assert Poll.Ready(None).is_ready
    assert Poll.Pending().is_pending
    assert Poll.Exhausted().is_exhausted
    assert Poll.Pending() == Poll(kind="pending")


def test_noop_waker_drives_by_hand():
    assert select(ready_now("x")).poll(noop_waker()).value == "x"
