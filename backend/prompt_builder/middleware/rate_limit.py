"""Per-client request ceiling for the generation endpoint.

An in-memory sliding window: for each key (client IP) a deque holds the
timestamps of accepted requests inside the current window. Old entries are
evicted on every check, and at most once per window the whole table is swept
so keys with no recent hits are dropped.
"""

import collections
import time
from collections.abc import Callable

import structlog
from fastapi import Request

from prompt_builder.core.config import get_settings
from prompt_builder.core.exceptions import RateLimitExceededError

logger = structlog.get_logger(__name__)


class SlidingWindowRateLimiter:
    """Allow at most ``max_requests`` per key within ``window_seconds``.

    Usage::

        limiter = SlidingWindowRateLimiter(max_requests=30, window_seconds=60)
        limiter.check("203.0.113.7")   # raises RateLimitExceededError when full
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, collections.deque[float]] = {}
        self._last_sweep = clock()

    @property
    def tracked_keys(self) -> int:
        return len(self._hits)

    def check(self, key: str) -> None:
        """Record one request for ``key``.

        Raises:
            RateLimitExceededError: If the key already used its whole window.
        """
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        hits = self._hits.setdefault(key, collections.deque())
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()

        if len(hits) >= self.max_requests:
            retry_after = self.window_seconds - (now - hits[0])
            logger.warning("rate_limit_exceeded", client=key, retry_after=round(retry_after, 1))
            raise RateLimitExceededError(key, retry_after)

        hits.append(now)

    def _sweep(self, now: float) -> None:
        # Newest hit outside the window means the whole deque has expired
        expired = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window_seconds]
        for key in expired:
            del self._hits[key]
        self._last_sweep = now
        if expired:
            logger.debug("rate_limit_keys_swept", removed=len(expired), remaining=len(self._hits))

    def reset(self) -> None:
        self._hits.clear()
        self._last_sweep = self._clock()


_limiter: SlidingWindowRateLimiter | None = None


def get_rate_limiter() -> SlidingWindowRateLimiter:
    global _limiter
    if _limiter is None:
        settings = get_settings()
        _limiter = SlidingWindowRateLimiter(
            max_requests=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
    return _limiter


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency applying the shared limiter to the caller's IP."""
    client_ip = request.client.host if request.client else "unknown"
    get_rate_limiter().check(client_ip)
