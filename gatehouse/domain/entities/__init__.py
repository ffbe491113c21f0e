"""Domain entities."""

from gatehouse.domain.entities.admin_user import AdminPrincipal, AdminUser
from gatehouse.domain.entities.audit_event import AuditEvent, AuditFilters, AuditStats
from gatehouse.domain.entities.otp_challenge import OtpChallenge
from gatehouse.domain.entities.session import Session

__all__ = [
    "AdminPrincipal",
    "AdminUser",
    "AuditEvent",
    "AuditFilters",
    "AuditStats",
    "OtpChallenge",
    "Session",
]
