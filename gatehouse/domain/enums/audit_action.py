"""Audit action types for the security trail.

Every security-relevant event recorded by the AuditLogger carries one of
these actions. Values use ``category.event`` dotted strings so that they read
naturally in exports and can be filtered by prefix.

Categories:
    - User: end-user OTP login and logout
    - OTP: challenge issuance and verification outcomes
    - Admin: admin login, logout and second factor
    - Session: creation, revocation, cleanup
    - Security: violations caught at the request boundary

Usage:
    from gatehouse.domain.enums import AuditAction

    await audit.record(AuditEvent(action=AuditAction.ADMIN_LOGIN, ...))
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action types.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    # =========================================================================
    # End users
    # =========================================================================

    USER_LOGIN = "user.login"
    USER_LOGOUT = "user.logout"

    # =========================================================================
    # One-time passcodes
    # =========================================================================

    OTP_REQUESTED = "otp.requested"
    OTP_VERIFIED = "otp.verified"
    OTP_FAILED = "otp.failed"

    # =========================================================================
    # Admins
    # =========================================================================

    ADMIN_LOGIN = "admin.login"
    ADMIN_LOGIN_FAILED = "admin.login_failed"
    ADMIN_LOGOUT = "admin.logout"
    ADMIN_TWO_FACTOR_SENT = "admin.two_factor_sent"
    ADMIN_TWO_FACTOR_VERIFIED = "admin.two_factor_verified"
    ADMIN_TWO_FACTOR_FAILED = "admin.two_factor_failed"

    # =========================================================================
    # Sessions
    # =========================================================================

    SESSION_CREATED = "session.created"
    SESSION_REVOKED = "session.revoked"
    SESSION_REVOKED_ALL = "session.revoked_all"
    SESSION_CLEANUP = "session.cleanup"

    # =========================================================================
    # Boundary violations
    # =========================================================================

    SECURITY_CSRF_VIOLATION = "security.csrf_violation"
    SECURITY_RATE_LIMIT_EXCEEDED = "security.rate_limit_exceeded"
    SECURITY_UNAUTHORIZED = "security.unauthorized"

    @property
    def is_violation(self) -> bool:
        """True for actions recorded when a request was refused."""
        return self.value.startswith("security.")
