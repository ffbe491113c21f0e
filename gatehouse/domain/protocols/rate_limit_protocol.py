"""Rate limit protocols (ports).

Two ports:
    - RateLimitStorageProtocol: atomic fixed-window counters (Redis, memory).
    - RateLimitProtocol: policy-aware limiter consulted by the HTTP layer.

The limiter is advisory. If the counter store fails, requests are allowed
and the failure is logged; a lost increment after a restart is acceptable.

Usage:
    result = await rate_limiter.check(client_key="1.2.3.4:/api/v1/csrf",
                                      policy=RateLimitPolicy.AUTH)
    match result:
        case Success(value=decision) if not decision.allowed:
            ...  # 429 with Retry-After: decision.retry_after
"""

from typing import Protocol

from gatehouse.core.result import Result
from gatehouse.domain.errors import RateLimitError
from gatehouse.domain.value_objects import RateLimitDecision, RateLimitPolicy


class RateLimitStorageProtocol(Protocol):
    """Atomic fixed-window counter storage."""

    async def increment(
        self, key: str, window_seconds: int
    ) -> Result[tuple[int, float], RateLimitError]:
        """Count one request in the window for ``key``.

        Starts a new window (count 1, ttl = window) if none exists.

        Returns:
            Success((count_after_increment, seconds_left_in_window)).
        """
        ...

    async def peek(self, key: str) -> Result[tuple[int, float], RateLimitError]:
        """Current (count, seconds_left) without counting. (0, 0) if no window."""
        ...

    async def delete(self, key: str) -> Result[None, RateLimitError]:
        """Drop the window for ``key``."""
        ...


class RateLimitProtocol(Protocol):
    """Policy-aware fixed-window rate limiter."""

    async def check(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Count this request and decide whether it is allowed."""
        ...

    async def get_status(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[RateLimitDecision, RateLimitError]:
        """Decision for the current window without counting a request."""
        ...

    async def reset(
        self, *, client_key: str, policy: RateLimitPolicy
    ) -> Result[None, RateLimitError]:
        """Clear the window. Reports real failures (not fail-open)."""
        ...
