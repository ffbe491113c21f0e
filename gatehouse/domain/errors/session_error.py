"""Session error types.

Returned by the SessionStore when a session cannot be used. These keep the
precise reason (missing, expired, waiting on second factor) for logging;
the AdminAuthFacade collapses all of them into a single Unauthorized before
anything reaches the caller.

Usage:
    return Failure(error=SessionError(
        code=ErrorCode.SESSION_EXPIRED,
        message="Session has expired",
    ))
"""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionError(DomainError):
    """Session lookup or verification failure.

    Codes:
        SESSION_NOT_FOUND, SESSION_EXPIRED, SESSION_SECOND_FACTOR_REQUIRED.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class CookieDecodeError(DomainError):
    """Session cookie was missing or did not hold a well-formed token.

    Codes:
        SESSION_COOKIE_MISSING, SESSION_COOKIE_MALFORMED.
    """

    pass
