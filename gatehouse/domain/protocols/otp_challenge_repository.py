"""OtpChallengeRepository protocol.

The store must supersede atomically: ``upsert`` is a single write keyed by
(email, purpose), so two challenges for the same key are never active at
the same time.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from gatehouse.domain.entities import OtpChallenge
from gatehouse.domain.enums import OtpPurpose


class OtpChallengeRepository(Protocol):
    """OTP challenge persistence port."""

    async def upsert(self, challenge: OtpChallenge) -> None:
        """Insert or replace the challenge for (email, purpose) in one write."""
        ...

    async def find(self, email: str, purpose: OtpPurpose) -> OtpChallenge | None:
        """Current challenge for (email, purpose), consumed or not."""
        ...

    async def claim_attempt(
        self, challenge_id: UUID, max_attempts: int
    ) -> int | None:
        """Atomically take one try against the challenge.

        Increments ``attempts`` only while the challenge is unconsumed and
        below ``max_attempts``. Returns the new count, or None when no try
        is left (gone, consumed or locked).
        """
        ...

    async def mark_consumed(
        self, challenge_id: UUID, at: datetime, max_attempts: int
    ) -> bool:
        """Consume the challenge if still unconsumed and within the cap.

        Returns True for exactly one caller per challenge.
        """
        ...
