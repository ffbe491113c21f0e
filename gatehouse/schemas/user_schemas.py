"""End-user account security schemas.

Endpoints:
    GET    /api/v1/user/sessions                - List own sessions
    DELETE /api/v1/user/sessions/{id}           - Revoke one other session
    POST   /api/v1/user/sessions/revoke-all     - Revoke all other sessions
    GET    /api/v1/user/security/login-history  - Recent logins

Session bodies reuse ``SessionResponse`` from ``session_schemas``.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class LoginHistoryEntry(BaseModel):
    """One successful login."""

    session_id: str | None = Field(None, description="Session opened by the login")
    ip_address: str | None = None
    user_agent: str | None = None
    device_name: str = Field(..., description="e.g. 'Safari on iOS'")
    created_at: datetime


class LoginHistoryResponse(BaseModel):
    history: list[LoginHistoryEntry]
    limit: int
    offset: int
