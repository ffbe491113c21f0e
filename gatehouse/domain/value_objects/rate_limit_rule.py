"""Rate limit rule value objects.

Fixed-window rate limiting: each (policy, client key) pair gets a counter
that lives for ``window_seconds``. Every call increments the counter; the
request is allowed while the counter is at or below ``limit``. When the
window elapses the counter disappears and the next call starts a new window.

Usage:
    from gatehouse.domain.value_objects import RateLimitPolicy

    rule = RateLimitPolicy.AUTH.rule
    rule.limit           # 50
    rule.window_seconds  # 60
"""

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Fixed-window rule (value object).

    Attributes:
        limit: Requests allowed per window.
        window_seconds: Window length.

    Raises:
        ValueError: If limit or window_seconds is not positive.
    """

    limit: int
    window_seconds: int

    def __post_init__(self) -> None:
        """Validate rule configuration after initialization."""
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.window_seconds <= 0:
            raise ValueError(
                f"window_seconds must be positive, got {self.window_seconds}"
            )


class RateLimitPolicy(str, Enum):
    """Named rate-limit presets.

    Callers pick the preset that matches the sensitivity of the route:
    login, OTP and two-factor endpoints use AUTH or STRICT, read-only
    lookups use STANDARD.

    Presets:
        STANDARD: 60 per minute
        AUTH: 50 per minute
        STRICT: 10 per minute
        FORM: 3 per 5 minutes
        NEWSLETTER: 1 per hour
    """

    STANDARD = "standard"
    AUTH = "auth"
    STRICT = "strict"
    FORM = "form"
    NEWSLETTER = "newsletter"

    @property
    def rule(self) -> RateLimitRule:
        """Limit and window for this preset."""
        return _PRESETS[self]


_PRESETS: dict[RateLimitPolicy, RateLimitRule] = {
    RateLimitPolicy.STANDARD: RateLimitRule(limit=60, window_seconds=60),
    RateLimitPolicy.AUTH: RateLimitRule(limit=50, window_seconds=60),
    RateLimitPolicy.STRICT: RateLimitRule(limit=10, window_seconds=60),
    RateLimitPolicy.FORM: RateLimitRule(limit=3, window_seconds=300),
    RateLimitPolicy.NEWSLETTER: RateLimitRule(limit=1, window_seconds=3600),
}


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitDecision:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Requests allowed in the window.
        remaining: Requests left in the current window.
        reset_at: Epoch seconds at which the current window ends.
        retry_after: Whole seconds until a retry can succeed (0 when allowed).
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: int = 0

    @classmethod
    def from_count(
        cls,
        *,
        rule: RateLimitRule,
        count: int,
        ttl_seconds: float,
        now: float,
    ) -> "RateLimitDecision":
        """Build a decision from a window counter.

        Args:
            rule: The rule being enforced.
            count: Counter value after this request was counted.
            ttl_seconds: Seconds left in the window (clamped to the window).
            now: Current epoch seconds.
        """
        ttl = min(max(ttl_seconds, 0.0), float(rule.window_seconds))
        allowed = count <= rule.limit
        retry_after = 0
        if not allowed:
            retry_after = min(max(1, math.ceil(ttl)), rule.window_seconds)
        return cls(
            allowed=allowed,
            limit=rule.limit,
            remaining=max(0, rule.limit - count),
            reset_at=now + ttl,
            retry_after=retry_after,
        )

    def reset_seconds(self, now: float) -> int:
        """Whole seconds from ``now`` until the window resets."""
        return max(0, math.ceil(self.reset_at - now))
