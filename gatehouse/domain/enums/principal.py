"""Principal and actor enums.

PrincipalKind decides whether a new session starts behind the two-factor
gate. AdminRole orders admin privileges. ActorType tags who produced an
audit event.
"""

from enum import Enum


class PrincipalKind(str, Enum):
    """Kind of principal that owns a session.

    Admin sessions start unverified and must clear a second factor before
    they can reach privileged routes. User sessions are usable immediately.
    """

    ADMIN = "admin"
    USER = "user"

    @property
    def requires_second_factor(self) -> bool:
        """Whether sessions of this kind start with two_factor_verified=False."""
        return self is PrincipalKind.ADMIN


class AdminRole(str, Enum):
    """Admin roles, lowest privilege first."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def rank(self) -> int:
        """Position in the privilege order."""
        return _ROLE_RANK[self]

    def satisfies(self, required: "AdminRole") -> bool:
        """True if this role grants at least the privileges of ``required``."""
        return self.rank >= required.rank


_ROLE_RANK = {AdminRole.ADMIN: 0, AdminRole.SUPER_ADMIN: 1}


class ActorType(str, Enum):
    """Who performed an audited action."""

    USER = "user"
    ADMIN = "admin"
    SYSTEM = "system"


class AuditStatus(str, Enum):
    """Outcome of an audited action."""

    SUCCESS = "success"
    FAILURE = "failure"
