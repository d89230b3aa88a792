"""Combinator primitives: join, try_join, select, try_select, join_stream, merge."""

from __future__ import annotations

from typing import Any, TypeVar

from confluence.config import CombinatorConfig
from confluence.kernel.poll import Pollable, PollStream
from confluence.kernel.trace import Trace

from .join import JoinAll
from .select import SelectFirst
from .stream import JoinStream, merge_all
from .try_join import TryJoinAll
from .try_select import TrySelectFirst

T = TypeVar("T")


def join(
    *pollables: Pollable[Any],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> JoinAll:
    """Await multiple pollables simultaneously, returning all outputs.

    Semantics:
        - Every source is polled on every drive call
        - Ready once all sources are ready, with a tuple of their outputs
        - Tuple order is declaration order, not completion order
        - No sources: ready with () on the first drive

    Args:
        *pollables: Sources, possibly of different output types.
        config: Combinator options (label).
        trace: Optional drive trace.

    Returns:
        JoinAll: A pollable of the output tuple.
    """
    return JoinAll(pollables, config=config, trace=trace)


def try_join(
    *pollables: Pollable[Any],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> TryJoinAll:
    """Await multiple fallible pollables, failing on the first error.

    Semantics:
        - Each source must complete with a Result
        - The first Err observed (declaration order within a pass) is
          returned as Result.Err immediately
        - Otherwise Result.Ok of the tuple of success values

    Args:
        *pollables: Sources whose outputs are Result values.
        config: Combinator options (label).
        trace: Optional drive trace.

    Returns:
        TryJoinAll: A pollable of Result[tuple, E].
    """
    return TryJoinAll(pollables, config=config, trace=trace)


def select(
    *pollables: Pollable[T],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> SelectFirst[T]:
    """Wait for whichever of several similarly-typed pollables finishes first.

    Semantics:
        - Sources are polled in declaration order; the first one found
          complete wins and later ones are not polled in that pass
        - Losing sources are released without further polling

    Args:
        *pollables: At least one source.
        config: Combinator options (label).
        trace: Optional drive trace.

    Returns:
        SelectFirst: A pollable of the winning output.
    """
    return SelectFirst(pollables, config=config, trace=trace)


def try_select(
    *pollables: Pollable[Any],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> TrySelectFirst:
    """Wait for the first fallible pollable that succeeds.

    Semantics:
        - Keeps going when a source fails, until some source succeeds
        - When all sources have failed, returns one failure, chosen by
          config.error_policy ("first" by default, or "last")

    Args:
        *pollables: At least one source whose output is a Result.
        config: Combinator options (error_policy, label).
        trace: Optional drive trace.

    Returns:
        TrySelectFirst: A pollable of the winning Result.
    """
    return TrySelectFirst(pollables, config=config, trace=trace)


def join_stream(
    left: PollStream[T],
    right: PollStream[T],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> JoinStream[T]:
    """Interleave two poll-streams, preferring the left one.

    Args:
        left: Preferred stream.
        right: Fallback stream, polled whenever left has no item.
        config: Combinator options (fair_merge, label).
        trace: Optional drive trace.

    Returns:
        JoinStream: A poll-stream of items from both sides.
    """
    return JoinStream(left, right, config=config, trace=trace)


def merge(
    *streams: PollStream[T],
    config: CombinatorConfig | None = None,
    trace: Trace | None = None,
) -> PollStream[T]:
    """Interleave any number of poll-streams by left-folding join_stream.

    Args:
        *streams: At least one stream; earlier streams are preferred.
        config: Combinator options applied to every join.
        trace: Optional drive trace.

    Returns:
        PollStream: The merged stream (the stream itself if only one).
    """
    return merge_all(streams, config=config, trace=trace)
