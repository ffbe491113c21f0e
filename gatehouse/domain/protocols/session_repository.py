"""SessionRepository protocol for session persistence.

Port for hexagonal architecture. Infrastructure provides the SQLAlchemy and
in-memory adapters; the SessionStore service depends only on this protocol.

Implementations may raise on storage failure. The service layer bounds every
call with a timeout and treats any failure as "not authenticated".
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from gatehouse.domain.entities import Session
from gatehouse.domain.enums import PrincipalKind


class SessionRepository(Protocol):
    """Session persistence port."""

    async def save(self, session: Session) -> None:
        """Insert a new session."""
        ...

    async def find_by_token_hash(self, token_hash: str) -> Session | None:
        """Find the session whose cookie token hashes to ``token_hash``."""
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find a session by its public id."""
        ...

    async def list_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        now: datetime,
    ) -> list[Session]:
        """Unexpired sessions of a principal, ordered by last_active_at desc."""
        ...

    async def update_activity(self, session_id: UUID, at: datetime) -> bool:
        """Set last_active_at. Returns False if the session no longer exists."""
        ...

    async def mark_two_factor_verified(self, session_id: UUID) -> bool:
        """Set two_factor_verified. Returns False if the session no longer exists."""
        ...

    async def delete(self, session_id: UUID, *, principal_id: str | None = None) -> bool:
        """Delete one session, optionally scoped to its owner."""
        ...

    async def delete_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        """Delete every session of a principal, optionally sparing one."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session with expires_at <= now."""
        ...

    async def count_active(self, now: datetime) -> int:
        """Number of unexpired sessions."""
        ...
