"""Unit tests for TwoFactorGate."""

import re
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from gatehouse.application.services import OtpService, SessionStore, TwoFactorGate
from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Success
from gatehouse.domain.entities import AdminUser
from gatehouse.domain.enums import PrincipalKind
from gatehouse.infrastructure.email import LoggingEmailAdapter
from gatehouse.infrastructure.memory import (
    MemoryOtpChallengeRepository,
    MemorySessionRepository,
)
from gatehouse.infrastructure.security import BcryptPasswordService, OtpCodeHasher
from tests.utils.auth_helpers import make_admin


@pytest.fixture
def outbox(logger: Mock) -> LoggingEmailAdapter:
    return LoggingEmailAdapter(logger=logger)


@pytest.fixture
def sessions(logger: Mock) -> SessionStore:
    return SessionStore(repository=MemorySessionRepository(), logger=logger)


@pytest.fixture
def gate(outbox: LoggingEmailAdapter, sessions: SessionStore, logger: Mock) -> TwoFactorGate:
    otp = OtpService(
        repository=MemoryOtpChallengeRepository(),
        codes=OtpCodeHasher(secret_key="pepper"),
        email=outbox,
        logger=logger,
    )
    return TwoFactorGate(otp_service=otp, session_store=sessions, logger=logger)


@pytest.fixture
def admin() -> AdminUser:
    return make_admin(BcryptPasswordService(cost_factor=4), email="admin@example.com")


def _code(outbox: LoggingEmailAdapter) -> str:
    match = re.search(r"Your code is (\d+)\.", outbox.sent[-1][2])
    assert match is not None
    return match.group(1)


async def _pending(sessions: SessionStore, admin: AdminUser):
    issued = await sessions.create_session(
        principal_id=str(admin.id), principal_kind=PrincipalKind.ADMIN
    )
    assert isinstance(issued, Success)
    return issued.value


@pytest.mark.unit
class TestTwoFactorGate:
    @pytest.mark.asyncio
    async def test_send_challenge_uses_admin_email(
        self, gate: TwoFactorGate, outbox: LoggingEmailAdapter, admin: AdminUser
    ) -> None:
        assert await gate.send_challenge(session_id=uuid7(), admin=admin) is True
        to, subject, _body = outbox.sent[-1]
        assert to == "admin@example.com"
        assert subject == "Your admin verification code"

    @pytest.mark.asyncio
    async def test_complete_promotes_session(
        self,
        gate: TwoFactorGate,
        sessions: SessionStore,
        outbox: LoggingEmailAdapter,
        admin: AdminUser,
    ) -> None:
        """Should verify the code and unlock the same session."""
        pending = await _pending(sessions, admin)
        await gate.send_challenge(session_id=pending.session.id, admin=admin)

        result = await gate.complete(
            session_id=pending.session.id, admin=admin, code=_code(outbox)
        )

        assert isinstance(result, Success)
        assert isinstance(await sessions.verify_session(pending.token), Success)

    @pytest.mark.asyncio
    async def test_wrong_code_leaves_session_pending(
        self,
        gate: TwoFactorGate,
        sessions: SessionStore,
        outbox: LoggingEmailAdapter,
        admin: AdminUser,
    ) -> None:
        pending = await _pending(sessions, admin)
        await gate.send_challenge(session_id=pending.session.id, admin=admin)
        wrong = "".join("1" if c == "0" else "0" for c in _code(outbox))

        result = await gate.complete(session_id=pending.session.id, admin=admin, code=wrong)

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.OTP_MISMATCH
        blocked = await sessions.verify_session(pending.token)
        assert isinstance(blocked, Failure)
        assert blocked.error.code is ErrorCode.SESSION_SECOND_FACTOR_REQUIRED

    @pytest.mark.asyncio
    async def test_session_gone_before_promotion(
        self,
        gate: TwoFactorGate,
        sessions: SessionStore,
        outbox: LoggingEmailAdapter,
        admin: AdminUser,
        logger: Mock,
    ) -> None:
        """Should report SESSION_NOT_FOUND when the session was revoked meanwhile."""
        pending = await _pending(sessions, admin)
        await gate.send_challenge(session_id=pending.session.id, admin=admin)
        await sessions.revoke_session(pending.session.id)

        result = await gate.complete(
            session_id=pending.session.id, admin=admin, code=_code(outbox)
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.SESSION_NOT_FOUND
        logger.warning.assert_called()

    @pytest.mark.asyncio
    async def test_send_failure_is_reported(
        self, sessions: SessionStore, admin: AdminUser, logger: Mock
    ) -> None:
        otp = AsyncMock(spec=OtpService)
        otp.create_and_send.return_value = False
        gate = TwoFactorGate(otp_service=otp, session_store=sessions, logger=logger)

        assert await gate.send_challenge(session_id=uuid7(), admin=admin) is False

    @pytest.mark.asyncio
    async def test_pending_sessions_have_separate_challenges(
        self,
        gate: TwoFactorGate,
        sessions: SessionStore,
        outbox: LoggingEmailAdapter,
        admin: AdminUser,
    ) -> None:
        """Should not let one pending login supersede or burn another's code."""
        first = await _pending(sessions, admin)
        second = await _pending(sessions, admin)
        await gate.send_challenge(session_id=first.session.id, admin=admin)
        first_code = _code(outbox)
        await gate.send_challenge(session_id=second.session.id, admin=admin)
        wrong = "".join("1" if c == "0" else "0" for c in _code(outbox))
        for _ in range(5):
            await gate.complete(session_id=second.session.id, admin=admin, code=wrong)

        result = await gate.complete(
            session_id=first.session.id, admin=admin, code=first_code
        )

        assert isinstance(result, Success)
        assert isinstance(await sessions.verify_session(first.token), Success)
        blocked = await sessions.verify_session(second.token)
        assert isinstance(blocked, Failure)

    @pytest.mark.asyncio
    async def test_code_is_bound_to_its_session(
        self,
        gate: TwoFactorGate,
        sessions: SessionStore,
        outbox: LoggingEmailAdapter,
        admin: AdminUser,
    ) -> None:
        first = await _pending(sessions, admin)
        second = await _pending(sessions, admin)
        await gate.send_challenge(session_id=first.session.id, admin=admin)

        result = await gate.complete(
            session_id=second.session.id, admin=admin, code=_code(outbox)
        )

        assert isinstance(result, Failure)
        assert result.error.code is ErrorCode.OTP_NOT_FOUND
