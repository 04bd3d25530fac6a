"""Rate limiter port."""

from abc import ABC, abstractmethod

from app.application.dtos.base import DTO


class RateLimitResult(DTO):
    """Outcome of a rate limit check."""

    allowed: bool
    remaining: int
    reset_in_seconds: int


class RateLimiterUnavailableError(Exception):
    """Raised when the rate limit backend cannot be reached."""


class RateLimiter(ABC):
    """Port interface for fixed-window rate limiting."""

    @abstractmethod
    async def hit(self, key: str, max_requests: int, window_seconds: int) -> RateLimitResult:
        """
        Count one request against a key.

        Args:
            key: Counter key (e.g. "otp-verify:203.0.113.7")
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            Whether the request is allowed and how much budget is left

        Raises:
            RateLimiterUnavailableError: If the backend cannot be reached
        """
        pass
