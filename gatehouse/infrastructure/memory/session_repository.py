"""In-memory session repository.

Dict-backed implementation of SessionRepository. No external dependencies,
useful for tests and single-process development. Sessions are lost on
restart; use SqlSessionRepository in production.

Entities are copied on the way in and out, so callers mutating a returned
Session never change stored state behind the repository's back.
"""

import asyncio
from dataclasses import replace
from datetime import datetime
from uuid import UUID

from gatehouse.domain.entities import Session
from gatehouse.domain.enums import PrincipalKind


class MemorySessionRepository:
    """In-memory SessionRepository keyed by public session id."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, Session] = {}
        self._lock = asyncio.Lock()

    async def save(self, session: Session) -> None:
        async with self._lock:
            self._sessions[session.id] = replace(session)

    async def find_by_token_hash(self, token_hash: str) -> Session | None:
        async with self._lock:
            for session in self._sessions.values():
                if session.token_hash == token_hash:
                    return replace(session)
            return None

    async def find_by_id(self, session_id: UUID) -> Session | None:
        async with self._lock:
            session = self._sessions.get(session_id)
            return replace(session) if session else None

    async def list_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        now: datetime,
    ) -> list[Session]:
        async with self._lock:
            sessions = [
                replace(s)
                for s in self._sessions.values()
                if s.principal_id == principal_id
                and s.principal_kind is principal_kind
                and not s.is_expired(now)
            ]
        sessions.sort(key=lambda s: s.last_active_at, reverse=True)
        return sessions

    async def update_activity(self, session_id: UUID, at: datetime) -> bool:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            session.touch(at)
            return True

    async def mark_two_factor_verified(self, session_id: UUID) -> bool:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            session.mark_two_factor_verified()
            return True

    async def delete(
        self, session_id: UUID, *, principal_id: str | None = None
    ) -> bool:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return False
            if principal_id is not None and session.principal_id != principal_id:
                return False
            del self._sessions[session_id]
            return True

    async def delete_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        async with self._lock:
            doomed = [
                sid
                for sid, s in self._sessions.items()
                if s.principal_id == principal_id
                and s.principal_kind is principal_kind
                and sid != except_session_id
            ]
            for sid in doomed:
                del self._sessions[sid]
            return len(doomed)

    async def delete_expired(self, now: datetime) -> int:
        async with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
            return len(expired)

    async def count_active(self, now: datetime) -> int:
        async with self._lock:
            return sum(1 for s in self._sessions.values() if not s.is_expired(now))

    def clear_all(self) -> None:
        """Clear all sessions. Useful for testing."""
        self._sessions.clear()
