"""In-memory admin user repository."""

from dataclasses import replace
from uuid import UUID

from gatehouse.domain.entities import AdminUser


class MemoryAdminUserRepository:
    """In-memory AdminUserRepository keyed by id."""

    def __init__(self, admins: list[AdminUser] | None = None) -> None:
        self._admins: dict[UUID, AdminUser] = {}
        for admin in admins or []:
            self._admins[admin.id] = replace(admin, email=admin.email.lower())

    async def find_by_email(self, email: str) -> AdminUser | None:
        wanted = email.lower()
        for admin in self._admins.values():
            if admin.email == wanted:
                return replace(admin)
        return None

    async def find_by_id(self, admin_id: UUID) -> AdminUser | None:
        admin = self._admins.get(admin_id)
        return replace(admin) if admin else None

    async def save(self, admin: AdminUser) -> None:
        self._admins[admin.id] = replace(admin, email=admin.email.lower())
