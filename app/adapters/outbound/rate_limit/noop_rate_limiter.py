"""No-op rate limiter adapter for when rate limiting is disabled."""

from app.application.ports.rate_limiter import RateLimiter, RateLimitResult


class NoOpRateLimiter(RateLimiter):
    """No-op adapter that allows every request."""

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> RateLimitResult:
        """
        Always allow.

        Args:
            key: Counter key (ignored)
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            Allowed result with the full budget
        """
        return RateLimitResult(
            allowed=True,
            remaining=max_requests,
            reset_in_seconds=window_seconds,
        )
