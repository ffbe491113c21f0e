"""SqlOtpChallengeRepository - SQLAlchemy implementation of OtpChallengeRepository.

PostgreSQL only: supersession relies on ``INSERT ... ON CONFLICT DO UPDATE``
against the (email, purpose) unique constraint, so a new challenge replaces
the old one in a single statement.
"""

from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert

from gatehouse.domain.entities import OtpChallenge
from gatehouse.domain.enums import OtpPurpose
from gatehouse.infrastructure.persistence.database import Database
from gatehouse.infrastructure.persistence.models.otp_challenge import (
    OtpChallengeModel,
)


class SqlOtpChallengeRepository:
    """SQLAlchemy implementation of the OtpChallengeRepository protocol."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def upsert(self, challenge: OtpChallenge) -> None:
        """Insert, or overwrite the existing (email, purpose) row."""
        stmt = pg_insert(OtpChallengeModel).values(
            id=challenge.id,
            email=challenge.email,
            purpose=challenge.purpose.value,
            code_hash=challenge.code_hash,
            salt=challenge.salt,
            created_at=challenge.created_at,
            expires_at=challenge.expires_at,
            consumed_at=None,
            attempts=0,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_otp_challenges_email_purpose",
            set_={
                "id": stmt.excluded.id,
                "code_hash": stmt.excluded.code_hash,
                "salt": stmt.excluded.salt,
                "created_at": stmt.excluded.created_at,
                "expires_at": stmt.excluded.expires_at,
                "consumed_at": None,
                "attempts": 0,
            },
        )
        async with self._database.get_session() as db:
            await db.execute(stmt)

    async def find(self, email: str, purpose: OtpPurpose) -> OtpChallenge | None:
        async with self._database.get_session() as db:
            result = await db.execute(
                select(OtpChallengeModel).where(
                    and_(
                        OtpChallengeModel.email == email,
                        OtpChallengeModel.purpose == purpose.value,
                    )
                )
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def claim_attempt(
        self, challenge_id: UUID, max_attempts: int
    ) -> int | None:
        """Guarded ``attempts = attempts + 1``; None when no try is left.

        The row filter carries the cap, so concurrent callers cannot take
        more than ``max_attempts`` tries between them.
        """
        async with self._database.get_session() as db:
            result = await db.execute(
                update(OtpChallengeModel)
                .where(
                    and_(
                        OtpChallengeModel.id == challenge_id,
                        OtpChallengeModel.consumed_at.is_(None),
                        OtpChallengeModel.attempts < max_attempts,
                    )
                )
                .values(attempts=OtpChallengeModel.attempts + 1)
                .returning(OtpChallengeModel.attempts)
            )
            return result.scalar_one_or_none()

    async def mark_consumed(
        self, challenge_id: UUID, at: datetime, max_attempts: int
    ) -> bool:
        """Conditional update; only the first concurrent caller sees True."""
        async with self._database.get_session() as db:
            result = await db.execute(
                update(OtpChallengeModel)
                .where(
                    and_(
                        OtpChallengeModel.id == challenge_id,
                        OtpChallengeModel.consumed_at.is_(None),
                        OtpChallengeModel.attempts <= max_attempts,
                    )
                )
                .values(consumed_at=at)
            )
            return (cast(Any, result).rowcount or 0) > 0

    @staticmethod
    def _to_entity(model: OtpChallengeModel) -> OtpChallenge:
        return OtpChallenge(
            id=model.id,
            email=model.email,
            purpose=OtpPurpose(model.purpose),
            code_hash=model.code_hash,
            salt=model.salt,
            created_at=model.created_at,
            expires_at=model.expires_at,
            consumed_at=model.consumed_at,
            attempts=model.attempts,
        )
