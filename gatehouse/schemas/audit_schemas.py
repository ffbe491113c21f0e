"""Audit log and security overview schemas.

Endpoints:
    GET /api/v1/admin/audit-logs        - Filtered, paginated audit trail
    GET /api/v1/admin/security/stats    - Counts over a trailing window
    GET /api/v1/admin/security/export   - JSON or CSV download
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus


class AuditEventResponse(BaseModel):
    id: UUID
    action: AuditAction
    status: AuditStatus
    actor_id: str | None = None
    actor_type: ActorType
    resource_type: str | None = None
    resource_id: str | None = None
    details: str | None = None
    endpoint: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime


class AuditLogListResponse(BaseModel):
    events: list[AuditEventResponse]
    limit: int
    offset: int


class SecurityStatsResponse(BaseModel):
    """Aggregates over the trailing window."""

    window_seconds: int
    total: int = Field(..., description="Events in the window")
    violations: int = Field(..., description="Failed or security.* events")
    by_action: dict[str, int]
    by_endpoint: dict[str, int]
    active_sessions: int | None = Field(
        None, description="Unexpired sessions right now (None if unavailable)"
    )
