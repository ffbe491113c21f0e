"""SQLAlchemy repository adapters."""

from gatehouse.infrastructure.persistence.repositories.admin_user_repository import (
    SqlAdminUserRepository,
)
from gatehouse.infrastructure.persistence.repositories.audit_store import (
    DatabaseAuditStore,
)
from gatehouse.infrastructure.persistence.repositories.otp_challenge_repository import (
    SqlOtpChallengeRepository,
)
from gatehouse.infrastructure.persistence.repositories.session_repository import (
    SqlSessionRepository,
)

__all__ = [
    "DatabaseAuditStore",
    "SqlAdminUserRepository",
    "SqlOtpChallengeRepository",
    "SqlSessionRepository",
]
