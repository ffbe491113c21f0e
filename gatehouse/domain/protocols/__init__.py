"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; nothing inherits from
them.
"""

from gatehouse.domain.protocols.admin_user_repository import AdminUserRepository
from gatehouse.domain.protocols.audit_protocol import (
    AuditProtocol,
    AuditStoreProtocol,
    ExportFormat,
)
from gatehouse.domain.protocols.email_protocol import EmailProtocol
from gatehouse.domain.protocols.logger_protocol import LoggerProtocol
from gatehouse.domain.protocols.otp_challenge_repository import OtpChallengeRepository
from gatehouse.domain.protocols.otp_code_protocol import OtpCodeProtocol
from gatehouse.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from gatehouse.domain.protocols.rate_limit_protocol import (
    RateLimitProtocol,
    RateLimitStorageProtocol,
)
from gatehouse.domain.protocols.session_repository import SessionRepository

__all__ = [
    "AdminUserRepository",
    "AuditProtocol",
    "AuditStoreProtocol",
    "EmailProtocol",
    "ExportFormat",
    "LoggerProtocol",
    "OtpChallengeRepository",
    "OtpCodeProtocol",
    "PasswordHashingProtocol",
    "RateLimitProtocol",
    "RateLimitStorageProtocol",
    "SessionRepository",
]
