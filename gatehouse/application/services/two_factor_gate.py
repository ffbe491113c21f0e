"""Two-factor gate for admin sessions.

An admin session is created unverified at login. The gate sends a
``two_factor`` OTP to the admin's address and, once the code checks out,
promotes that same session. Until then the session can reach nothing but the
two-factor routes themselves.

Each challenge is scoped to its pending session, so two logins for the same
admin never supersede or exhaust each other's code.
"""

from uuid import UUID

from gatehouse.application.services.otp_service import OtpService
from gatehouse.application.services.session_store import SessionStore
from gatehouse.core.errors import DomainError
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.entities import AdminUser
from gatehouse.domain.enums import OtpPurpose
from gatehouse.domain.protocols import LoggerProtocol


class TwoFactorGate:
    """Compose the OTP service and the session store into the 2FA step."""

    def __init__(
        self,
        *,
        otp_service: OtpService,
        session_store: SessionStore,
        logger: LoggerProtocol,
    ) -> None:
        self._otp = otp_service
        self._sessions = session_store
        self._logger = logger

    async def send_challenge(self, *, session_id: UUID, admin: AdminUser) -> bool:
        """Email a code scoped to this pending session. False on delivery failure."""
        return await self._otp.create_and_send(
            admin.email, OtpPurpose.TWO_FACTOR, scope=str(session_id)
        )

    async def complete(
        self, *, session_id: UUID, admin: AdminUser, code: str
    ) -> Result[None, DomainError]:
        """Verify the code and promote the session.

        The OTP is consumed before promotion. If the session disappears in
        between (revoked, swept) the result is SESSION_NOT_FOUND and the
        admin has to log in again.
        """
        verified = await self._otp.verify(
            admin.email, OtpPurpose.TWO_FACTOR, code, scope=str(session_id)
        )
        if isinstance(verified, Failure):
            return verified

        promoted = await self._sessions.promote_two_factor(session_id)
        if isinstance(promoted, Failure):
            self._logger.warning(
                "Second factor verified but session is gone",
                session_id=str(session_id),
                error_code=promoted.error.code.value,
            )
            return promoted
        return Success(value=None)
