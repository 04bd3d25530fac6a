"""In-memory fixed-window rate limiter adapter."""

import math
import time
from typing import Callable, Optional

from app.application.ports.rate_limiter import RateLimiter, RateLimitResult


class InMemoryRateLimiter(RateLimiter):
    """Per-process fixed-window counters. Suitable for a single worker."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        """
        Initialize in-memory rate limiter.

        Args:
            clock: Returns monotonic seconds (defaults to time.monotonic)
        """
        self._clock = clock or time.monotonic
        # key -> (count, window reset time)
        self._windows: dict[str, tuple[int, float]] = {}

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._windows.items() if now >= reset_at]
        for key in expired:
            del self._windows[key]

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> RateLimitResult:
        """
        Count one request against a key.

        Args:
            key: Counter key
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            Rate limit result
        """
        now = self._clock()
        self._purge_expired(now)

        count, reset_at = self._windows.get(key, (0, now + window_seconds))
        reset_in = max(0, math.ceil(reset_at - now))
        if count >= max_requests:
            return RateLimitResult(allowed=False, remaining=0, reset_in_seconds=reset_in)

        count += 1
        self._windows[key] = (count, reset_at)
        return RateLimitResult(
            allowed=True,
            remaining=max_requests - count,
            reset_in_seconds=reset_in,
        )
