"""Session store service.

Owns the Session lifecycle on top of a SessionRepository:

    create_session -> verify_session (refreshes last_active)
                   -> promote_two_factor (admin only, once)
                   -> revoke_session / revoke_all / cleanup_expired

Tokens:
    ``create_session`` mints a 32-byte token and hands it back exactly once
    for the cookie. Only its SHA-256 digest is stored; lookups hash the
    presented cookie value.

Failure policy:
    Every repository call is timeout-bounded. A store failure surfaces as
    ``Failure`` and is never read as "authenticated".
"""

from collections.abc import Awaitable
from typing import TypeVar
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from gatehouse.application.services.bounded import bounded
from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import DomainError
from gatehouse.core.fingerprinting import client_fingerprint, parse_user_agent
from gatehouse.core.result import Failure, Result, Success
from gatehouse.core.tokens import generate_token, hash_token
from gatehouse.domain.entities import Session
from gatehouse.domain.enums import PrincipalKind
from gatehouse.domain.errors import SessionError
from gatehouse.domain.protocols import LoggerProtocol, SessionRepository

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedSession:
    """A freshly created session and the token to put in its cookie.

    Attributes:
        session: The stored session.
        token: Raw cookie token. Returned once, never stored.
    """

    session: Session
    token: str


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionListing:
    """One row of a session enumeration."""

    session: Session
    is_current: bool


class SessionStore:
    """Session lifecycle service.

    Args:
        repository: Session persistence port.
        logger: Structured logger.
        admin_ttl: Lifetime of admin sessions.
        user_ttl: Lifetime of end-user sessions.
        timeout_seconds: Bound on every repository call.
    """

    def __init__(
        self,
        *,
        repository: SessionRepository,
        logger: LoggerProtocol,
        admin_ttl: timedelta = timedelta(days=7),
        user_ttl: timedelta = timedelta(days=30),
        timeout_seconds: float = 5.0,
    ) -> None:
        self._repository = repository
        self._logger = logger
        self._ttl = {PrincipalKind.ADMIN: admin_ttl, PrincipalKind.USER: user_ttl}
        self._timeout = timeout_seconds

    def ttl_for(self, principal_kind: PrincipalKind) -> timedelta:
        """Session lifetime for a principal kind (also the cookie max-age)."""
        return self._ttl[principal_kind]

    async def create_session(
        self,
        *,
        principal_id: str,
        principal_kind: PrincipalKind,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Result[IssuedSession, DomainError]:
        """Mint and persist a new session.

        Admin sessions start with ``two_factor_verified=False``; user
        sessions start verified.
        """
        token = generate_token()
        now = datetime.now(UTC)
        device = parse_user_agent(user_agent)
        session = Session(
            id=uuid7(),
            token_hash=hash_token(token),
            principal_id=principal_id,
            principal_kind=principal_kind,
            created_at=now,
            last_active_at=now,
            expires_at=now + self._ttl[principal_kind],
            ip_address=ip_address,
            user_agent=user_agent,
            fingerprint=client_fingerprint(ip_address, user_agent),
            device_name=device.device_name,
            device_type=device.device_type,
            browser=device.browser,
            os=device.os,
            two_factor_verified=not principal_kind.requires_second_factor,
        )

        saved = await self._call(self._repository.save(session), "session.save")
        if isinstance(saved, Failure):
            return saved

        self._logger.info(
            "Session created",
            session_id=str(session.id),
            principal_kind=principal_kind.value,
            device=session.device_name,
        )
        return Success(value=IssuedSession(session=session, token=token))

    async def verify_session(
        self, token: str, *, allow_unverified: bool = False
    ) -> Result[Session, DomainError]:
        """Resolve a cookie token to a usable session.

        Fails with SESSION_NOT_FOUND, SESSION_EXPIRED or (unless
        ``allow_unverified``) SESSION_SECOND_FACTOR_REQUIRED. On success
        ``last_active_at`` is refreshed.
        """
        found = await self._call(
            self._repository.find_by_token_hash(hash_token(token)),
            "session.find_by_token_hash",
        )
        match found:
            case Failure():
                return found
            case Success(value=None):
                return Failure(error=_session_error(ErrorCode.SESSION_NOT_FOUND))
            case Success(value=session):
                pass

        now = datetime.now(UTC)
        if session.is_expired(now):
            return Failure(error=_session_error(ErrorCode.SESSION_EXPIRED))
        if session.needs_second_factor() and not allow_unverified:
            return Failure(
                error=_session_error(ErrorCode.SESSION_SECOND_FACTOR_REQUIRED)
            )

        return await self.refresh(session, now=now)

    async def refresh(
        self, session: Session, *, now: datetime | None = None
    ) -> Result[Session, DomainError]:
        """Touch ``last_active_at``. NOT_FOUND if the session was revoked meanwhile."""
        at = now or datetime.now(UTC)
        updated = await self._call(
            self._repository.update_activity(session.id, at),
            "session.update_activity",
        )
        match updated:
            case Failure():
                return updated
            case Success(value=False):
                return Failure(error=_session_error(ErrorCode.SESSION_NOT_FOUND))
        session.touch(at)
        return Success(value=session)

    async def find_session(self, session_id: UUID) -> Result[Session, DomainError]:
        """Load a session by its public id. Expired sessions count as missing."""
        found = await self._call(
            self._repository.find_by_id(session_id), "session.find_by_id"
        )
        match found:
            case Failure():
                return found
            case Success(value=None):
                return Failure(error=_session_error(ErrorCode.SESSION_NOT_FOUND))
            case Success(value=session) if session.is_expired():
                return Failure(error=_session_error(ErrorCode.SESSION_EXPIRED))
            case Success(value=session):
                return Success(value=session)

    async def promote_two_factor(self, session_id: UUID) -> Result[None, DomainError]:
        """Mark the session as having cleared its second factor.

        Idempotent. Fails with SESSION_NOT_FOUND if the session vanished
        between the challenge and this call.
        """
        updated = await self._call(
            self._repository.mark_two_factor_verified(session_id),
            "session.mark_two_factor_verified",
        )
        match updated:
            case Failure():
                return updated
            case Success(value=False):
                return Failure(error=_session_error(ErrorCode.SESSION_NOT_FOUND))
        self._logger.info("Session second factor verified", session_id=str(session_id))
        return Success(value=None)

    async def list_sessions(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        current_session_id: UUID | None = None,
    ) -> Result[list[SessionListing], DomainError]:
        """Unexpired sessions, most recently active first, current one flagged."""
        listed = await self._call(
            self._repository.list_for_principal(
                principal_id, principal_kind, now=datetime.now(UTC)
            ),
            "session.list_for_principal",
        )
        if isinstance(listed, Failure):
            return listed
        return Success(
            value=[
                SessionListing(session=s, is_current=s.id == current_session_id)
                for s in listed.value
            ]
        )

    async def revoke_session(
        self, session_id: UUID, *, principal_id: str | None = None
    ) -> Result[bool, DomainError]:
        """Delete one session. Revoking a session that is already gone is not an error.

        Returns:
            Success(True) if a session was deleted, Success(False) if none matched.
        """
        deleted = await self._call(
            self._repository.delete(session_id, principal_id=principal_id),
            "session.delete",
        )
        if isinstance(deleted, Success) and deleted.value:
            self._logger.info("Session revoked", session_id=str(session_id))
        return deleted

    async def revoke_all(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        except_session_id: UUID | None = None,
    ) -> Result[int, DomainError]:
        """Delete every session of a principal, optionally sparing one."""
        deleted = await self._call(
            self._repository.delete_for_principal(
                principal_id, principal_kind, except_session_id=except_session_id
            ),
            "session.delete_for_principal",
        )
        if isinstance(deleted, Success):
            self._logger.info(
                "Sessions revoked",
                principal_kind=principal_kind.value,
                count=deleted.value,
                kept_current=except_session_id is not None,
            )
        return deleted

    async def cleanup_expired(self) -> Result[int, DomainError]:
        deleted = await self._call(
            self._repository.delete_expired(datetime.now(UTC)),
            "session.delete_expired",
        )
        if isinstance(deleted, Success):
            self._logger.info("Expired sessions removed", count=deleted.value)
        return deleted

    async def count_active(self) -> Result[int, DomainError]:
        return await self._call(
            self._repository.count_active(datetime.now(UTC)), "session.count_active"
        )

    async def _call(
        self, call: Awaitable[T], operation: str
    ) -> Result[T, DomainError]:
        return await bounded(
            call, timeout=self._timeout, logger=self._logger, operation=operation
        )


def _session_error(code: ErrorCode) -> SessionError:
    messages = {
        ErrorCode.SESSION_NOT_FOUND: "Session not found",
        ErrorCode.SESSION_EXPIRED: "Session has expired",
        ErrorCode.SESSION_SECOND_FACTOR_REQUIRED: "Second factor required",
    }
    return SessionError(code=code, message=messages[code])
