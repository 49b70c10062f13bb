"""Waiting for external state (mount table, Finder) to converge."""

import asyncio
import time
from collections.abc import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


async def wait_until(
    condition: Callable[[], bool],
    timeout: float,
    interval: float,
    sleep: Sleep = asyncio.sleep,
    clock: Clock = time.monotonic,
) -> bool:
    """Poll ``condition`` until it holds or ``timeout`` seconds pass.

    The condition is always checked at least once, and once more after the
    deadline so a slow last interval is not lost.

    Returns:
        True if the condition became true, False on timeout
    """
    deadline = clock() + timeout
    while True:
        if condition():
            return True
        if clock() >= deadline:
            return False
        await sleep(interval)
