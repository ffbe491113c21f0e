"""Base model and mixins for all database entities.

- BaseModel: id + created_at (immutable rows such as audit events)
- BaseMutableModel: adds updated_at (admin users, sessions, challenges)

Domain entities never inherit from these; repositories map between them.
"""

from datetime import datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (UUIDv7 unless set explicitly)
    - created_at: creation timestamp (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        """String showing class name and ID."""
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Adds updated_at, maintained by the database on UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models (id, created_at, updated_at)."""

    __abstract__ = True
