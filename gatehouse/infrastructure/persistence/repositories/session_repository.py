"""SqlSessionRepository - SQLAlchemy implementation of SessionRepository.

Adapter for hexagonal architecture. Maps between the domain Session entity
and the auth_sessions table. Every method opens its own short transaction.

Conditional writes (update_activity, mark_two_factor_verified, delete) report
whether a row was affected, so callers can tell a revoked session apart from
a live one without a second read.
"""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import and_, delete, func, select, update

from gatehouse.domain.entities import Session
from gatehouse.domain.enums import PrincipalKind
from gatehouse.infrastructure.persistence.database import Database
from gatehouse.infrastructure.persistence.models.session import SessionModel


class SqlSessionRepository:
    """SQLAlchemy implementation of the SessionRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Example:
        >>> repo = SqlSessionRepository(database)
        >>> session = await repo.find_by_token_hash(hash_token(cookie_value))
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def save(self, session: Session) -> None:
        async with self._database.get_session() as db:
            db.add(self._to_model(session))

    async def find_by_token_hash(self, token_hash: str) -> Session | None:
        async with self._database.get_session() as db:
            result = await db.execute(
                select(SessionModel).where(SessionModel.token_hash == token_hash)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def find_by_id(self, session_id: UUID) -> Session | None:
        async with self._database.get_session() as db:
            model = await db.get(SessionModel, session_id)
            return self._to_entity(model) if model else None

    async def list_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        now: datetime,
    ) -> list[Session]:
        """Unexpired sessions of a principal, most recently active first."""
        async with self._database.get_session() as db:
            result = await db.execute(
                select(SessionModel)
                .where(
                    and_(
                        SessionModel.principal_id == principal_id,
                        SessionModel.principal_kind == principal_kind.value,
                        SessionModel.expires_at > now,
                    )
                )
                .order_by(SessionModel.last_active_at.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

    async def update_activity(self, session_id: UUID, at: datetime) -> bool:
        async with self._database.get_session() as db:
            result = await db.execute(
                update(SessionModel)
                .where(SessionModel.id == session_id)
                .values(last_active_at=at)
            )
            return (cast(Any, result).rowcount or 0) > 0

    async def mark_two_factor_verified(self, session_id: UUID) -> bool:
        async with self._database.get_session() as db:
            result = await db.execute(
                update(SessionModel)
                .where(SessionModel.id == session_id)
                .values(two_factor_verified=True)
            )
            return (cast(Any, result).rowcount or 0) > 0

    async def delete(
        self, session_id: UUID, *, principal_id: str | None = None
    ) -> bool:
        """Delete one session; with ``principal_id`` only if it owns it."""
        stmt = delete(SessionModel).where(SessionModel.id == session_id)
        if principal_id is not None:
            stmt = stmt.where(SessionModel.principal_id == principal_id)
        async with self._database.get_session() as db:
            result = await db.execute(stmt)
            return (cast(Any, result).rowcount or 0) > 0

    async def delete_for_principal(
        self,
        principal_id: str,
        principal_kind: PrincipalKind,
        *,
        except_session_id: UUID | None = None,
    ) -> int:
        conditions = [
            SessionModel.principal_id == principal_id,
            SessionModel.principal_kind == principal_kind.value,
        ]
        if except_session_id is not None:
            conditions.append(SessionModel.id != except_session_id)
        async with self._database.get_session() as db:
            result = await db.execute(delete(SessionModel).where(and_(*conditions)))
            return cast(Any, result).rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        async with self._database.get_session() as db:
            result = await db.execute(
                delete(SessionModel).where(SessionModel.expires_at <= now)
            )
            return cast(Any, result).rowcount or 0

    async def count_active(self, now: datetime) -> int:
        async with self._database.get_session() as db:
            result = await db.execute(
                select(func.count(SessionModel.id)).where(
                    SessionModel.expires_at > now
                )
            )
            return result.scalar_one()

    # =========================================================================
    # Mapping
    # =========================================================================

    @staticmethod
    def _to_entity(model: SessionModel) -> Session:
        return Session(
            id=model.id,
            token_hash=model.token_hash,
            principal_id=model.principal_id,
            principal_kind=PrincipalKind(model.principal_kind),
            created_at=model.created_at,
            last_active_at=model.last_active_at,
            expires_at=model.expires_at,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            fingerprint=model.fingerprint,
            device_name=model.device_name,
            device_type=model.device_type,
            browser=model.browser,
            os=model.os,
            two_factor_verified=model.two_factor_verified,
        )

    @staticmethod
    def _to_model(session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            token_hash=session.token_hash,
            principal_id=session.principal_id,
            principal_kind=session.principal_kind.value,
            created_at=session.created_at,
            last_active_at=session.last_active_at,
            expires_at=session.expires_at,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            fingerprint=session.fingerprint,
            device_name=session.device_name,
            device_type=session.device_type,
            browser=session.browser,
            os=session.os,
            two_factor_verified=session.two_factor_verified,
        )
