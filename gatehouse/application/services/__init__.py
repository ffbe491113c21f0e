"""Application services for the auth core."""

from gatehouse.application.services.admin_auth import (
    AdminAuthenticator,
    AdminAuthFacade,
)
from gatehouse.application.services.otp_service import OtpService, normalize_email
from gatehouse.application.services.session_cookie import (
    SessionCookie,
    decode_session_cookie,
)
from gatehouse.application.services.session_store import (
    IssuedSession,
    SessionListing,
    SessionStore,
)
from gatehouse.application.services.two_factor_gate import TwoFactorGate

__all__ = [
    "AdminAuthFacade",
    "AdminAuthenticator",
    "IssuedSession",
    "OtpService",
    "SessionCookie",
    "SessionListing",
    "SessionStore",
    "TwoFactorGate",
    "decode_session_cookie",
    "normalize_email",
]
