"""SqlAdminUserRepository - SQLAlchemy implementation of AdminUserRepository."""

from uuid import UUID

from sqlalchemy import select

from gatehouse.domain.entities import AdminUser
from gatehouse.domain.enums import AdminRole
from gatehouse.infrastructure.persistence.database import Database
from gatehouse.infrastructure.persistence.models.admin_user import AdminUserModel


class SqlAdminUserRepository:
    """SQLAlchemy implementation of the AdminUserRepository protocol."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def find_by_email(self, email: str) -> AdminUser | None:
        async with self._database.get_session() as db:
            result = await db.execute(
                select(AdminUserModel).where(AdminUserModel.email == email.lower())
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def find_by_id(self, admin_id: UUID) -> AdminUser | None:
        async with self._database.get_session() as db:
            model = await db.get(AdminUserModel, admin_id)
            return self._to_entity(model) if model else None

    async def save(self, admin: AdminUser) -> None:
        """Create or update an admin account."""
        async with self._database.get_session() as db:
            existing = await db.get(AdminUserModel, admin.id)
            if existing is None:
                db.add(
                    AdminUserModel(
                        id=admin.id,
                        email=admin.email.lower(),
                        full_name=admin.full_name,
                        role=admin.role.value,
                        password_hash=admin.password_hash,
                        is_active=admin.is_active,
                    )
                )
            else:
                existing.email = admin.email.lower()
                existing.full_name = admin.full_name
                existing.role = admin.role.value
                existing.password_hash = admin.password_hash
                existing.is_active = admin.is_active

    @staticmethod
    def _to_entity(model: AdminUserModel) -> AdminUser:
        return AdminUser(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            role=AdminRole(model.role),
            password_hash=model.password_hash,
            is_active=model.is_active,
        )
