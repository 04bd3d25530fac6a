"""Rate limiter adapters."""

from app.adapters.outbound.rate_limit.in_memory_rate_limiter import InMemoryRateLimiter
from app.adapters.outbound.rate_limit.noop_rate_limiter import NoOpRateLimiter
from app.adapters.outbound.rate_limit.redis_rate_limiter import RedisRateLimiter

__all__ = [
    "InMemoryRateLimiter",
    "NoOpRateLimiter",
    "RedisRateLimiter",
]
