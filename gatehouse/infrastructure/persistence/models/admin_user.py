"""Admin user database model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from gatehouse.infrastructure.persistence.base import BaseMutableModel


class AdminUserModel(BaseMutableModel):
    """Administrator account row."""

    __tablename__ = "admin_users"

    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
