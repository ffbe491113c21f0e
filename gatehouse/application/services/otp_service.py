"""OTP service: issue and verify one-time email codes.

Issue:
    1. Normalise the email (strip, lowercase)
    2. Generate a code and a per-challenge salt
    3. Upsert the hashed challenge (supersedes any prior one for the key)
    4. Send the code by email; report delivery failure as ``False``

Verify (first failing check wins):
    NotFound -> Expired -> TooManyAttempts -> claim one try (attempts += 1,
    refused at the cap) -> Mismatch -> consume (exactly once) -> Success

The claim is a single guarded write, so concurrent guesses never compare more
than ``max_attempts`` codes against one challenge.

The plaintext code exists only between generation and the email call. It is
never stored and never logged.
"""

from collections.abc import Awaitable
from typing import TypeVar
from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7

from gatehouse.application.services.bounded import bounded
from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import DomainError
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.entities import OtpChallenge
from gatehouse.domain.enums import OtpPurpose
from gatehouse.domain.errors import OtpError
from gatehouse.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    OtpChallengeRepository,
    OtpCodeProtocol,
)

T = TypeVar("T")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def challenge_key(email: str, scope: str | None = None) -> str:
    """Store key for a challenge: the address, narrowed by an optional scope.

    A scoped challenge (e.g. one per pending session) never supersedes or
    shares attempts with another scope for the same address.
    """
    recipient = normalize_email(email)
    return f"{recipient}#{scope}" if scope else recipient


class OtpService:
    """Issue and verify OTP challenges.

    Args:
        repository: Challenge persistence port (atomic upsert).
        codes: Code generator and hasher.
        email: Outbound email port.
        logger: Structured logger.
        ttl: Challenge lifetime.
        max_attempts: Tries allowed before the challenge locks.
        timeout_seconds: Bound on every store and email call.
    """

    def __init__(
        self,
        *,
        repository: OtpChallengeRepository,
        codes: OtpCodeProtocol,
        email: EmailProtocol,
        logger: LoggerProtocol,
        ttl: timedelta = timedelta(minutes=10),
        max_attempts: int = 5,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._repository = repository
        self._codes = codes
        self._email = email
        self._logger = logger
        self._ttl = ttl
        self._max_attempts = max_attempts
        self._timeout = timeout_seconds

    @property
    def code_length(self) -> int:
        return self._codes.code_length

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def create_and_send(
        self, email: str, purpose: OtpPurpose, *, scope: str | None = None
    ) -> bool:
        """Issue a new challenge and email its code.

        Args:
            email: Recipient address.
            purpose: Challenge purpose.
            scope: Narrows the challenge key below (email, purpose).

        Returns:
            True once the email sender accepted the message. False on any
            store or delivery failure; nothing is raised.
        """
        recipient = normalize_email(email)
        key = challenge_key(email, scope)
        code = self._codes.generate_code()
        salt = self._codes.new_salt()
        now = datetime.now(UTC)
        challenge = OtpChallenge(
            id=uuid7(),
            email=key,
            purpose=purpose,
            code_hash=self._codes.hash_code(code, salt),
            salt=salt,
            created_at=now,
            expires_at=now + self._ttl,
        )

        stored = await self._call(self._repository.upsert(challenge), "otp.upsert")
        if isinstance(stored, Failure):
            return False

        minutes = int(self._ttl.total_seconds() // 60)
        sent = await self._call(
            self._email.send(
                to=recipient,
                subject=purpose.email_subject,
                body=(
                    f"Your code is {code}.\n\n"
                    f"It expires in {minutes} minutes. "
                    "If you did not ask for it, you can ignore this email."
                ),
            ),
            "email.send",
        )
        match sent:
            case Success(value=Success(value=message_id)):
                self._logger.info(
                    "OTP issued",
                    challenge_id=str(challenge.id),
                    purpose=purpose.value,
                    message_id=message_id,
                )
                return True
            case Success(value=Failure(error=error)):
                self._logger.warning(
                    "OTP delivery failed",
                    challenge_id=str(challenge.id),
                    purpose=purpose.value,
                    error_code=error.code.value,
                )
                return False
            case _:
                return False

    async def verify(
        self,
        email: str,
        purpose: OtpPurpose,
        code: str,
        *,
        scope: str | None = None,
    ) -> Result[None, DomainError]:
        """Check a code against the active challenge for (email, purpose, scope).

        Returns:
            Success(None) exactly once per challenge.
            Failure(OtpError) with OTP_NOT_FOUND, OTP_EXPIRED,
            OTP_TOO_MANY_ATTEMPTS or OTP_MISMATCH; Failure(DomainError) when
            the store is unavailable.
        """
        found = await self._call(
            self._repository.find(challenge_key(email, scope), purpose), "otp.find"
        )
        match found:
            case Failure():
                return found
            case Success(value=None):
                return Failure(error=_otp_error(ErrorCode.OTP_NOT_FOUND))
            case Success(value=challenge):
                pass

        now = datetime.now(UTC)
        if challenge.is_consumed:
            return Failure(error=_otp_error(ErrorCode.OTP_NOT_FOUND))
        if challenge.is_expired(now):
            return Failure(error=_otp_error(ErrorCode.OTP_EXPIRED))
        if challenge.attempts_exhausted(self._max_attempts):
            return Failure(error=_otp_error(ErrorCode.OTP_TOO_MANY_ATTEMPTS))

        # The snapshot above may be stale; the claim is the real gate.
        claimed = await self._call(
            self._repository.claim_attempt(challenge.id, self._max_attempts),
            "otp.claim_attempt",
        )
        match claimed:
            case Failure():
                return claimed
            case Success(value=None):
                return Failure(error=_otp_error(ErrorCode.OTP_TOO_MANY_ATTEMPTS))
            case Success(value=attempts):
                pass

        if not self._codes.matches(
            code, salt=challenge.salt, code_hash=challenge.code_hash
        ):
            remaining = max(0, self._max_attempts - attempts)
            self._logger.info(
                "OTP mismatch",
                challenge_id=str(challenge.id),
                purpose=purpose.value,
                attempts_remaining=remaining,
            )
            return Failure(
                error=OtpError(
                    code=ErrorCode.OTP_MISMATCH,
                    message="Code does not match",
                    attempts_remaining=remaining,
                )
            )

        consumed = await self._call(
            self._repository.mark_consumed(challenge.id, now, self._max_attempts),
            "otp.mark_consumed",
        )
        match consumed:
            case Failure():
                return consumed
            case Success(value=False):
                return Failure(error=_otp_error(ErrorCode.OTP_NOT_FOUND))

        self._logger.info(
            "OTP verified", challenge_id=str(challenge.id), purpose=purpose.value
        )
        return Success(value=None)

    async def _call(
        self, call: Awaitable[T], operation: str
    ) -> Result[T, DomainError]:
        return await bounded(
            call, timeout=self._timeout, logger=self._logger, operation=operation
        )


def _otp_error(code: ErrorCode) -> OtpError:
    messages = {
        ErrorCode.OTP_NOT_FOUND: "No active code",
        ErrorCode.OTP_EXPIRED: "Code has expired",
        ErrorCode.OTP_TOO_MANY_ATTEMPTS: "Too many failed attempts",
    }
    return OtpError(code=code, message=messages[code])
