"""OTP error types.

Usage:
    return Failure(error=OtpError(
        code=ErrorCode.OTP_TOO_MANY_ATTEMPTS,
        message="Too many failed attempts",
    ))
"""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpError(DomainError):
    """OTP verification failure.

    Codes:
        OTP_NOT_FOUND: No active challenge (never issued, superseded, or consumed).
        OTP_EXPIRED: Challenge is past its TTL.
        OTP_TOO_MANY_ATTEMPTS: Attempt counter reached the configured maximum.
        OTP_MISMATCH: Code did not match; attempt counter was incremented.

    Attributes:
        attempts_remaining: Tries left after a mismatch, when known.
    """

    attempts_remaining: int | None = None
