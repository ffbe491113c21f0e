"""Session management schemas (admin and end-user routes).

RESTful Endpoints:
    GET    /api/v1/admin/sessions          - List sessions
    DELETE /api/v1/admin/sessions/{id}     - Revoke one session
    DELETE /api/v1/admin/sessions          - Revoke all other sessions
    POST   /api/v1/admin/sessions/refresh  - Touch the current session
    POST   /api/v1/admin/sessions/cleanup  - Delete expired sessions
    GET    /api/v1/user/sessions           - List sessions
    DELETE /api/v1/user/sessions/{id}      - Revoke one session
    POST   /api/v1/user/sessions/revoke-all - Revoke all other sessions
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gatehouse.domain.entities import Session


class SessionResponse(BaseModel):
    """One session of the calling principal."""

    id: UUID = Field(..., description="Session identifier")
    device_name: str | None = Field(None, description="e.g. 'Chrome on macOS'")
    device_type: str | None = Field(None, description="desktop, mobile or tablet")
    browser: str | None = None
    os: str | None = None
    ip_address: str | None = Field(None, description="IP address at creation")
    created_at: datetime
    last_active_at: datetime
    expires_at: datetime
    two_factor_verified: bool
    is_current: bool = Field(default=False, description="The session of this request")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "01890a5d-ac96-774b-bcce-b302099a8057",
                "device_name": "Chrome on macOS",
                "device_type": "desktop",
                "browser": "Chrome",
                "os": "macOS",
                "ip_address": "203.0.113.7",
                "created_at": "2026-01-15T10:30:00Z",
                "last_active_at": "2026-01-15T14:45:00Z",
                "expires_at": "2026-01-22T10:30:00Z",
                "two_factor_verified": True,
                "is_current": True,
            }
        }
    )

    @classmethod
    def from_session(cls, session: Session, *, is_current: bool) -> "SessionResponse":
        return cls(
            id=session.id,
            device_name=session.device_name,
            device_type=session.device_type,
            browser=session.browser,
            os=session.os,
            ip_address=session.ip_address,
            created_at=session.created_at,
            last_active_at=session.last_active_at,
            expires_at=session.expires_at,
            two_factor_verified=session.two_factor_verified,
            is_current=is_current,
        )


class SessionListResponse(BaseModel):
    sessions: list[SessionResponse]
    total: int


class SessionRevokeAllResponse(BaseModel):
    revoked_count: int = Field(..., description="Sessions revoked (current one kept)")


class SessionCleanupResponse(BaseModel):
    deleted_count: int = Field(..., description="Expired sessions deleted")
