"""Bounded retry with exponential backoff for catalog calls.

The executor distinguishes three outcomes of an async operation:

1. **A value** -- returned as :class:`Found` immediately.
2. **None** -- a *definitive negative* ("no such artist").  Returned as
   :class:`NotFound` immediately; retrying cannot change the answer.
3. **An exception** -- a *transient* failure.  Logged, then retried after
   the current delay, which is multiplied by ``multiplier`` each time.

After ``max_attempts`` consecutive failures the executor gives up and
returns :class:`Failed`.  Callers treat that exactly like not-found so one
unreachable album never aborts a run.  Delay growth is uncapped; keep
``max_attempts`` small.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from bandlink.models.lookup import Failed, Found, Lookup, NotFound
from bandlink.utils.errors import ConfigurationError
from bandlink.utils.logging import get_logger

_T = TypeVar("_T")

SleepFn = Callable[[float], Awaitable[None]]


class BackoffExecutor:
    """Runs fallible async operations with bounded exponential backoff.

    Parameters
    ----------
    sleep:
        Coroutine function used to wait between attempts.  Tests inject a
        recorder instead of ``asyncio.sleep``.
    """

    def __init__(self, sleep: SleepFn = asyncio.sleep) -> None:
        self._sleep = sleep
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def execute(
        self,
        operation: Callable[[], Awaitable[_T | None]],
        max_attempts: int = 5,
        initial_delay: float = 1.0,
        multiplier: float = 2.0,
    ) -> Lookup[_T]:
        """Invoke *operation* until it answers or *max_attempts* are used up.

        Parameters
        ----------
        operation:
            Zero-argument coroutine function.  Return ``None`` for a
            definitive negative; raise for anything worth retrying.
        max_attempts:
            Total invocations allowed, including the first.
        initial_delay:
            Seconds to wait after the first failure.
        multiplier:
            Factor applied to the delay after every failure.

        Returns
        -------
        Lookup
            ``Found(value)``, ``NotFound()`` or ``Failed(reason, attempts)``.
        """
        if max_attempts < 1:
            raise ConfigurationError(message=f"max_attempts must be >= 1, got {max_attempts}")

        delay = initial_delay
        last_error = ""
        for attempt in range(1, max_attempts + 1):
            try:
                result = await operation()
            except Exception as exc:
                last_error = str(exc) or type(exc).__name__
                if attempt == max_attempts:
                    break
                self._logger.warning(
                    "retry_scheduled",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay_seconds=round(delay, 3),
                    error=last_error,
                )
                await self._sleep(delay)
                delay *= multiplier
                continue

            if result is None:
                return NotFound()
            return Found(result)

        self._logger.error(
            "retries_exhausted",
            attempts=max_attempts,
            error=last_error,
        )
        return Failed(reason=last_error, attempts=max_attempts)
