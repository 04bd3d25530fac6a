"""Redis fixed-window rate limiter adapter."""

from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from app.application.ports.rate_limiter import (
    RateLimiter,
    RateLimiterUnavailableError,
    RateLimitResult,
)


class RedisRateLimiter(RateLimiter):
    """Redis adapter for rate limiting shared across workers."""

    KEY_PREFIX = "ratelimit:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis rate limiter.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, key: str) -> str:
        """
        Make Redis key for a counter.

        Args:
            key: Counter key

        Returns:
            Redis key string
        """
        return f"{self.KEY_PREFIX}{key}"

    async def hit(self, key: str, max_requests: int, window_seconds: int) -> RateLimitResult:
        """
        Count one request against a key.

        A counter without an expiry (a new key, or one whose EXPIRE was lost)
        is given the window length as its TTL.

        Args:
            key: Counter key
            max_requests: Requests allowed per window
            window_seconds: Window length in seconds

        Returns:
            Rate limit result

        Raises:
            RateLimiterUnavailableError: If Redis cannot be reached
        """
        redis_key = self._make_key(key)
        try:
            client = await self._get_client()
            count = await client.incr(redis_key)
            ttl = await client.ttl(redis_key)
            if ttl is None or ttl < 0:
                await client.expire(redis_key, window_seconds)
                ttl = window_seconds
        except RedisError as e:
            raise RateLimiterUnavailableError(str(e)) from e
        reset_in = ttl if ttl > 0 else window_seconds

        if count > max_requests:
            return RateLimitResult(allowed=False, remaining=0, reset_in_seconds=reset_in)
        return RateLimitResult(
            allowed=True,
            remaining=max_requests - count,
            reset_in_seconds=reset_in,
        )

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
