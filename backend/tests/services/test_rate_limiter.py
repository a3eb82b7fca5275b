"""Tests for the sliding-window rate limiter."""

import pytest

from prompt_builder.core.exceptions import RateLimitExceededError
from prompt_builder.middleware.rate_limit import SlidingWindowRateLimiter

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_up_to_max_requests():
    limiter = SlidingWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
    for _ in range(3):
        limiter.check("1.2.3.4")


def test_rejects_request_over_ceiling():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=clock)
    limiter.check("1.2.3.4")
    clock.now += 10
    limiter.check("1.2.3.4")

    with pytest.raises(RateLimitExceededError) as exc_info:
        limiter.check("1.2.3.4")

    assert exc_info.value.retry_after == pytest.approx(50)
    assert exc_info.value.status_code == 429


def test_window_slides():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.check("1.2.3.4")
    clock.now += 60
    limiter.check("1.2.3.4")


def test_rejected_requests_are_not_counted():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.check("a")
    for _ in range(5):
        with pytest.raises(RateLimitExceededError):
            limiter.check("a")
    clock.now += 60
    limiter.check("a")


def test_keys_are_independent():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.check("a")
    limiter.check("b")
    with pytest.raises(RateLimitExceededError):
        limiter.check("a")


def test_reset_clears_history():
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
    limiter.check("a")
    limiter.reset()
    limiter.check("a")


def test_idle_keys_are_dropped_after_window():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock)
    for i in range(10_000):
        limiter.check(f"10.0.{i // 256}.{i % 256}")
    assert limiter.tracked_keys == 10_000

    clock.now += 3600
    limiter.check("1.1.1.1")

    assert limiter.tracked_keys == 1


def test_sweep_keeps_keys_with_recent_hits():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
    limiter.check("old")
    clock.now += 30
    limiter.check("recent")
    clock.now += 40

    limiter.check("new")

    assert limiter.tracked_keys == 2
    with pytest.raises(RateLimitExceededError):
        limiter.check("recent")
