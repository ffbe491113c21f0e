"""Map domain errors onto HTTP problems.

    Unauthorized / session errors   401  "Authentication required"
    Forbidden                       403
    CSRF errors                     403
    OTP mismatch / missing / expired 400 "Invalid or expired code"
    OTP too many attempts           429
    OTP delivery failure            502
    Validation                      422
    anything else                   500  (no internals)

OTP and session failures are deliberately coarse: the caller learns that a
code or session did not work, never which check rejected it.
"""

from fastapi import status

from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import DomainError
from gatehouse.presentation.routers.api.v1.errors.exception_handlers import (
    ProblemException,
)

_UNAUTHORIZED = frozenset(
    {
        ErrorCode.UNAUTHORIZED,
        ErrorCode.INVALID_CREDENTIALS,
        ErrorCode.SESSION_NOT_FOUND,
        ErrorCode.SESSION_EXPIRED,
        ErrorCode.SESSION_SECOND_FACTOR_REQUIRED,
        ErrorCode.SESSION_COOKIE_MISSING,
        ErrorCode.SESSION_COOKIE_MALFORMED,
    }
)

_OTP_INVALID = frozenset(
    {ErrorCode.OTP_MISMATCH, ErrorCode.OTP_NOT_FOUND, ErrorCode.OTP_EXPIRED}
)


def http_error_for(error: DomainError) -> ProblemException:
    """ProblemException to raise for ``error``."""
    code = error.code
    if code is ErrorCode.INVALID_CREDENTIALS:
        return ProblemException(
            status.HTTP_401_UNAUTHORIZED, error.message, slug=code.value
        )
    if code in _UNAUTHORIZED:
        return ProblemException(
            status.HTTP_401_UNAUTHORIZED, "Authentication required"
        )
    if code is ErrorCode.FORBIDDEN:
        return ProblemException(status.HTTP_403_FORBIDDEN, error.message)
    if code in (ErrorCode.CSRF_TOKEN_MISSING, ErrorCode.CSRF_TOKEN_INVALID):
        return ProblemException(
            status.HTTP_403_FORBIDDEN, error.message, slug=code.value
        )
    if code in _OTP_INVALID:
        return ProblemException(
            status.HTTP_400_BAD_REQUEST, "Invalid or expired code", slug="otp_invalid"
        )
    if code is ErrorCode.OTP_TOO_MANY_ATTEMPTS:
        return ProblemException(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many failed attempts. Request a new code.",
            slug=code.value,
        )
    if code is ErrorCode.OTP_DELIVERY_FAILED:
        return ProblemException(
            status.HTTP_502_BAD_GATEWAY,
            "Could not send the code. Try again later.",
            slug=code.value,
        )
    if code is ErrorCode.VALIDATION_FAILED:
        return ProblemException(
            status.HTTP_422_UNPROCESSABLE_ENTITY, error.message, slug=code.value
        )
    return ProblemException(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please contact support with the trace ID.",
    )
