"""Fixed-window rate limiting: limiter plus Redis and memory counter storage."""

from gatehouse.infrastructure.rate_limit.fixed_window_limiter import (
    FixedWindowRateLimiter,
)
from gatehouse.infrastructure.rate_limit.memory_storage import (
    MemoryFixedWindowStorage,
)
from gatehouse.infrastructure.rate_limit.redis_storage import (
    RedisFixedWindowStorage,
)

__all__ = [
    "FixedWindowRateLimiter",
    "MemoryFixedWindowStorage",
    "RedisFixedWindowStorage",
]
