"""Request pacing shared by every catalog call in a run.

Two kinds of waiting happen during a run:

- :meth:`RateLimiter.throttle` -- called before each catalog request.  It
  sleeps only for whatever remains of the interval since the previous
  request, so back-to-back calls are spaced at least ``interval`` apart.
- :meth:`RateLimiter.cooldown` -- called by the orchestrator after each
  album.  It always sleeps the full interval and leaves the request
  timestamp alone, so the next request finds the interval already spent.

There is one limiter per run and a single task drives it, so it holds no
lock.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

SleepFn = Callable[[float], Awaitable[None]]
ClockFn = Callable[[], float]


class RateLimiter:
    """Minimum-interval pacer for catalog requests."""

    def __init__(
        self,
        interval: float,
        sleep: SleepFn = asyncio.sleep,
        clock: ClockFn = time.monotonic,
    ) -> None:
        self._interval = max(0.0, interval)
        self._sleep = sleep
        self._clock = clock
        self._last_request_time: float | None = None

    async def throttle(self) -> None:
        now = self._clock()
        if self._last_request_time is not None:
            elapsed = now - self._last_request_time
            if elapsed < self._interval:
                await self._sleep(self._interval - elapsed)
        self._last_request_time = self._clock()

    async def cooldown(self) -> None:
        if self._interval > 0:
            await self._sleep(self._interval)
