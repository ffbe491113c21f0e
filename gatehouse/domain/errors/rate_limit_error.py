"""Rate limit error types.

Usage:
    return Failure(error=RateLimitError(
        code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
        message="Failed to check rate limit: Redis connection lost",
    ))
"""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Rate limit system failure or rejection.

    A denied request is normally reported as a ``RateLimitDecision`` with
    ``allowed=False``. This error carries the rejection across the HTTP
    boundary (code RATE_LIMIT_EXCEEDED, with ``retry_after``) and reports
    storage failures (RATE_LIMIT_CHECK_FAILED, RATE_LIMIT_RESET_FAILED).

    Attributes:
        retry_after: Seconds until the client may retry.
    """

    retry_after: int | None = None
