"""Combinators - composition of pollables and poll-streams."""

from confluence.combinators.join import JoinAll
from confluence.combinators.ops import join, join_stream, merge, select, try_join, try_select
from confluence.combinators.select import SelectFirst
from confluence.combinators.stream import JoinStream
from confluence.combinators.try_join import TryJoinAll
from confluence.combinators.try_select import TrySelectFirst
from confluence.combinators.types import Combinator

__all__ = [
    "Combinator",
    "JoinAll",
    "TryJoinAll",
    "SelectFirst",
    "TrySelectFirst",
    "JoinStream",
    "join",
    "try_join",
    "select",
    "try_select",
    "join_stream",
    "merge",
]
