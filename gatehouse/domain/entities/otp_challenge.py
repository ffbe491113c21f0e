"""OTP challenge domain entity.

A pending expectation of a one-time code sent out-of-band. At most one
active challenge exists per (email, purpose); issuing a new one overwrites
the previous record in a single keyed write.

The plaintext code never reaches this entity: only a salted, peppered
SHA-256 digest and its salt are kept.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from gatehouse.domain.enums import OtpPurpose


@dataclass(slots=True, kw_only=True)
class OtpChallenge:
    """Pending OTP verification.

    Attributes:
        id: Challenge identifier (changes on every supersession).
        email: Normalised recipient address.
        purpose: What the code unlocks.
        code_hash: Hex digest of the code.
        salt: Hex salt mixed into the digest.
        created_at: Issue time.
        expires_at: End of validity.
        consumed_at: When the code was successfully used, if ever.
        attempts: Failed verification count.
    """

    id: UUID
    email: str
    purpose: OtpPurpose
    code_hash: str
    salt: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime
    consumed_at: datetime | None = None
    attempts: int = 0

    @property
    def is_consumed(self) -> bool:
        """True once the challenge has been verified."""
        return self.consumed_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``now`` has reached ``expires_at``."""
        current = now or datetime.now(UTC)
        return current >= self.expires_at

    def attempts_exhausted(self, max_attempts: int) -> bool:
        """True when no further verification tries are allowed."""
        return self.attempts >= max_attempts

    def is_active(self, max_attempts: int, now: datetime | None = None) -> bool:
        """Unconsumed, unexpired and not locked out."""
        return (
            not self.is_consumed
            and not self.is_expired(now)
            and not self.attempts_exhausted(max_attempts)
        )
