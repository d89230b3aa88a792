"""Race a few fallible lookups and merge two feeds, driven by asyncio.

Run with: python examples/race.py
"""

from __future__ import annotations

import asyncio
import logging

from confluence import (
    Trace,
    drive,
    from_async_iterator,
    from_awaitable,
    iterate,
    join,
    merge,
    try_select,
)


async def lookup(name: str, delay: float, fail: bool = False) -> str:
    await asyncio.sleep(delay)
    if fail:
        raise LookupError(f"{name} unavailable")
    return f"{name}: ok"


async def feed(prefix: str, count: int):
    for i in range(count):
        await asyncio.sleep(0.01)
        yield f"{prefix}-{i}"


async def main() -> None:
    trace = Trace()

    mirror = await drive(try_select(
        from_awaitable(asyncio.Event().wait(), capture=True),
        from_awaitable(lookup("primary", 0.01, fail=True), capture=True),
        from_awaitable(lookup("backup", 0.05), capture=True),
        trace=trace,
    ))
    print("first success:", mirror.unwrap())

    both = await drive(join(from_awaitable(lookup("a", 0.02)), from_awaitable(lookup("b", 0.01))))
    print("joined:", both)

    async for item in iterate(merge(from_async_iterator(feed("left", 3)), from_async_iterator(feed("right", 2)))):
        print("merged:", item)

    print(f"{len(trace)} trace events recorded")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
