"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Boundary errors (UNAUTHORIZED, FORBIDDEN)
- Session errors (SESSION_*)
- CSRF errors (CSRF_*)
- Rate limit errors (RATE_LIMIT_*)
- OTP errors (OTP_*)
- Audit trail errors (AUDIT_*)
- Infrastructure errors (DATABASE_ERROR, CACHE_ERROR, ...)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    VALIDATION_FAILED = "validation_failed"

    # Boundary errors (what callers of the façade see)
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INVALID_CREDENTIALS = "invalid_credentials"

    # Session errors
    SESSION_NOT_FOUND = "session_not_found"
    SESSION_EXPIRED = "session_expired"
    SESSION_SECOND_FACTOR_REQUIRED = "session_second_factor_required"
    SESSION_COOKIE_MISSING = "session_cookie_missing"
    SESSION_COOKIE_MALFORMED = "session_cookie_malformed"

    # CSRF errors
    CSRF_TOKEN_MISSING = "csrf_token_missing"
    CSRF_TOKEN_INVALID = "csrf_token_invalid"

    # Rate limit errors
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    RATE_LIMIT_CHECK_FAILED = "rate_limit_check_failed"
    RATE_LIMIT_RESET_FAILED = "rate_limit_reset_failed"

    # OTP errors
    OTP_NOT_FOUND = "otp_not_found"
    OTP_EXPIRED = "otp_expired"
    OTP_TOO_MANY_ATTEMPTS = "otp_too_many_attempts"
    OTP_MISMATCH = "otp_mismatch"
    OTP_DELIVERY_FAILED = "otp_delivery_failed"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_QUERY_FAILED = "audit_query_failed"

    # Infrastructure errors
    DATABASE_ERROR = "database_error"
    CACHE_ERROR = "cache_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"
