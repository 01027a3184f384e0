"""Unit tests for RateLimiter."""

from __future__ import annotations

import pytest

from bandlink.pipeline.rate_limiter import RateLimiter
from tests.conftest import SleepRecorder, VirtualClock


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestRateLimiter:
    @pytest.mark.asyncio
    async def test_first_throttle_does_not_wait(self, sleep_recorder: SleepRecorder) -> None:
        limiter = RateLimiter(1.0, sleep=sleep_recorder, clock=_FakeClock())
        await limiter.throttle()
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_back_to_back_requests_wait_for_remaining_interval(
        self, sleep_recorder: SleepRecorder
    ) -> None:
        clock = _FakeClock()
        limiter = RateLimiter(1.0, sleep=sleep_recorder, clock=clock)

        await limiter.throttle()
        clock.now += 0.25
        await limiter.throttle()

        assert sleep_recorder.delays == [pytest.approx(0.75)]

    @pytest.mark.asyncio
    async def test_no_wait_once_interval_elapsed(self, sleep_recorder: SleepRecorder) -> None:
        clock = _FakeClock()
        limiter = RateLimiter(1.0, sleep=sleep_recorder, clock=clock)

        await limiter.throttle()
        clock.now += 2.0
        await limiter.throttle()

        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_cooldown_always_sleeps_full_interval(self, sleep_recorder: SleepRecorder) -> None:
        limiter = RateLimiter(1.5, sleep=sleep_recorder, clock=_FakeClock())

        await limiter.cooldown()
        await limiter.cooldown()

        assert sleep_recorder.delays == [1.5, 1.5]

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self, sleep_recorder: SleepRecorder) -> None:
        limiter = RateLimiter(0.0, sleep=sleep_recorder, clock=_FakeClock())

        await limiter.throttle()
        await limiter.throttle()
        await limiter.cooldown()

        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_request_after_cooldown_does_not_wait_again(self) -> None:
        clock = VirtualClock()
        limiter = RateLimiter(1.0, sleep=clock.sleep, clock=clock)

        await limiter.throttle()
        await limiter.cooldown()
        await limiter.throttle()

        assert clock.delays == [1.0]
