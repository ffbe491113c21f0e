"""Audit trail error types.

Usage:
    return Failure(error=AuditError(
        code=ErrorCode.AUDIT_RECORD_FAILED,
        message="Failed to record audit entry: database connection lost",
    ))
"""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Audit system failure.

    Attributes:
        code: AUDIT_RECORD_FAILED or AUDIT_QUERY_FAILED.
        message: Human-readable message.
        details: Additional context.
    """

    pass
