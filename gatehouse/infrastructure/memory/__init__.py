"""In-memory adapters for tests and single-process development."""

from gatehouse.infrastructure.memory.admin_user_repository import (
    MemoryAdminUserRepository,
)
from gatehouse.infrastructure.memory.audit_store import MemoryAuditStore
from gatehouse.infrastructure.memory.otp_challenge_repository import (
    MemoryOtpChallengeRepository,
)
from gatehouse.infrastructure.memory.session_repository import (
    MemorySessionRepository,
)

__all__ = [
    "MemoryAdminUserRepository",
    "MemoryAuditStore",
    "MemoryOtpChallengeRepository",
    "MemorySessionRepository",
]
