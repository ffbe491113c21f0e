"""AdminUserRepository protocol."""

from typing import Protocol
from uuid import UUID

from gatehouse.domain.entities import AdminUser


class AdminUserRepository(Protocol):
    """Admin account lookup port."""

    async def find_by_email(self, email: str) -> AdminUser | None:
        """Find an admin by lowercased email."""
        ...

    async def find_by_id(self, admin_id: UUID) -> AdminUser | None:
        """Find an admin by id."""
        ...

    async def save(self, admin: AdminUser) -> None:
        """Insert or update an admin account."""
        ...
