"""OTP challenge database model.

The (email, purpose) unique constraint is what makes supersession a single
``INSERT ... ON CONFLICT DO UPDATE``. ``email`` holds the challenge key, which
may carry a ``#scope`` suffix.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gatehouse.infrastructure.persistence.base import BaseMutableModel


class OtpChallengeModel(BaseMutableModel):
    """Pending one-time passcode (hash only)."""

    __tablename__ = "otp_challenges"

    email: Mapped[str] = mapped_column(String(400), nullable=False)
    purpose: Mapped[str] = mapped_column(String(32), nullable=False)
    code_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    salt: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    consumed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("email", "purpose", name="uq_otp_challenges_email_purpose"),
    )
