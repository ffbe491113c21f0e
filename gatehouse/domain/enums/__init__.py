"""Domain enums.

Available Enums:
    - AuditAction: Security trail action types
    - PrincipalKind: admin or user session owner
    - AdminRole: admin privilege levels
    - ActorType: who produced an audit event
    - AuditStatus: success or failure
    - OtpPurpose: what an OTP challenge unlocks
"""

from gatehouse.domain.enums.audit_action import AuditAction
from gatehouse.domain.enums.otp_purpose import OtpPurpose
from gatehouse.domain.enums.principal import (
    ActorType,
    AdminRole,
    AuditStatus,
    PrincipalKind,
)

__all__ = [
    "AuditAction",
    "OtpPurpose",
    "PrincipalKind",
    "AdminRole",
    "ActorType",
    "AuditStatus",
]
