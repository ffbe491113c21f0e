"""Session database model.

Indexes:
    - ix_auth_sessions_token_hash (unique): cookie lookup
    - ix_auth_sessions_principal: (principal_id, principal_kind) for listing
    - ix_auth_sessions_expires_at: expiry sweep
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gatehouse.infrastructure.persistence.base import BaseMutableModel


class SessionModel(BaseMutableModel):
    """Authenticated session row. Stores the token digest, never the token."""

    __tablename__ = "auth_sessions"

    token_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 of the cookie token",
    )
    principal_id: Mapped[str] = mapped_column(String(255), nullable=False)
    principal_kind: Mapped[str] = mapped_column(String(16), nullable=False)

    last_active_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    fingerprint: Mapped[str | None] = mapped_column(String(64), nullable=True)
    device_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    device_type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    browser: Mapped[str | None] = mapped_column(String(64), nullable=True)
    os: Mapped[str | None] = mapped_column(String(64), nullable=True)

    two_factor_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    __table_args__ = (
        Index("ix_auth_sessions_principal", "principal_id", "principal_kind"),
    )
