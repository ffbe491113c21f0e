"""Domain errors package.

Usage:
    from gatehouse.domain.errors import AuditError, OtpError, SessionError
"""

from gatehouse.domain.errors.audit_error import AuditError
from gatehouse.domain.errors.csrf_error import CsrfError
from gatehouse.domain.errors.otp_error import OtpError
from gatehouse.domain.errors.rate_limit_error import RateLimitError
from gatehouse.domain.errors.session_error import CookieDecodeError, SessionError

__all__ = [
    "AuditError",
    "CookieDecodeError",
    "CsrfError",
    "OtpError",
    "RateLimitError",
    "SessionError",
]
