"""In-memory OTP challenge repository.

Keyed by (email, purpose) so an upsert is one dict assignment: the previous
challenge is gone the moment the new one lands.
"""

import asyncio
from dataclasses import replace
from datetime import datetime
from uuid import UUID

from gatehouse.domain.entities import OtpChallenge
from gatehouse.domain.enums import OtpPurpose


class MemoryOtpChallengeRepository:
    """In-memory OtpChallengeRepository."""

    def __init__(self) -> None:
        self._challenges: dict[tuple[str, OtpPurpose], OtpChallenge] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, challenge: OtpChallenge) -> None:
        async with self._lock:
            self._challenges[(challenge.email, challenge.purpose)] = replace(
                challenge, consumed_at=None, attempts=0
            )

    async def find(self, email: str, purpose: OtpPurpose) -> OtpChallenge | None:
        async with self._lock:
            challenge = self._challenges.get((email, purpose))
            return replace(challenge) if challenge else None

    async def claim_attempt(
        self, challenge_id: UUID, max_attempts: int
    ) -> int | None:
        async with self._lock:
            challenge = self._by_id(challenge_id)
            if (
                challenge is None
                or challenge.is_consumed
                or challenge.attempts_exhausted(max_attempts)
            ):
                return None
            challenge.attempts += 1
            return challenge.attempts

    async def mark_consumed(
        self, challenge_id: UUID, at: datetime, max_attempts: int
    ) -> bool:
        async with self._lock:
            challenge = self._by_id(challenge_id)
            if (
                challenge is None
                or challenge.is_consumed
                or challenge.attempts > max_attempts
            ):
                return False
            challenge.consumed_at = at
            return True

    def _by_id(self, challenge_id: UUID) -> OtpChallenge | None:
        for challenge in self._challenges.values():
            if challenge.id == challenge_id:
                return challenge
        return None
