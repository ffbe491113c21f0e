"""SQLAlchemy models. Importing this package registers every table."""

from gatehouse.infrastructure.persistence.models.admin_user import AdminUserModel
from gatehouse.infrastructure.persistence.models.audit_event import AuditEventModel
from gatehouse.infrastructure.persistence.models.otp_challenge import OtpChallengeModel
from gatehouse.infrastructure.persistence.models.session import SessionModel

__all__ = ["AdminUserModel", "AuditEventModel", "OtpChallengeModel", "SessionModel"]
