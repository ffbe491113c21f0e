"""Admin user domain entity."""

from dataclasses import dataclass
from uuid import UUID

from gatehouse.domain.enums import AdminRole


@dataclass(slots=True, kw_only=True)
class AdminUser:
    """Administrator account.

    Attributes:
        id: Admin identifier.
        email: Lowercased login email (also the second-factor address).
        full_name: Display name.
        role: Privilege level.
        password_hash: bcrypt hash of the primary credential.
        is_active: Deactivated admins cannot authenticate.
    """

    id: UUID
    email: str
    full_name: str
    role: AdminRole
    password_hash: str
    is_active: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class AdminPrincipal:
    """An authenticated admin, as seen by privileged route handlers.

    Attributes:
        admin: The admin account.
        session_id: Public id of the session the request arrived on.
        two_factor_verified: Whether that session cleared its second factor.
    """

    admin: AdminUser
    session_id: UUID
    two_factor_verified: bool
