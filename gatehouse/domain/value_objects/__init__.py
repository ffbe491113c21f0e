"""Domain value objects."""

from gatehouse.domain.value_objects.csrf_token import CsrfToken
from gatehouse.domain.value_objects.rate_limit_rule import (
    RateLimitDecision,
    RateLimitPolicy,
    RateLimitRule,
)

__all__ = ["CsrfToken", "RateLimitDecision", "RateLimitPolicy", "RateLimitRule"]
