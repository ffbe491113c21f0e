"""Unit tests for decode_session_cookie."""

import pytest

from gatehouse.application.services import decode_session_cookie
from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Success
from gatehouse.core.tokens import generate_token


@pytest.mark.unit
class TestDecodeSessionCookie:
    def test_well_formed_token(self) -> None:
        token = generate_token()

        result = decode_session_cookie(token)

        assert isinstance(result, Success)
        assert result.value.token == token

    def test_surrounding_whitespace_is_ignored(self) -> None:
        token = generate_token()

        result = decode_session_cookie(f" {token} ")

        assert isinstance(result, Success)
        assert result.value.token == token

    @pytest.mark.parametrize(
        ("raw", "code", "reason"),
        [
            (None, ErrorCode.SESSION_COOKIE_MISSING, "missing"),
            ("", ErrorCode.SESSION_COOKIE_MISSING, "missing"),
            ("abc", ErrorCode.SESSION_COOKIE_MALFORMED, "wrong_length"),
            ("a" * 65, ErrorCode.SESSION_COOKIE_MALFORMED, "wrong_length"),
            ("Z" * 64, ErrorCode.SESSION_COOKIE_MALFORMED, "malformed"),
            ("A" * 64, ErrorCode.SESSION_COOKIE_MALFORMED, "malformed"),
        ],
    )
    def test_rejections(self, raw: str | None, code: ErrorCode, reason: str) -> None:
        """Should never fall back to an anonymous request."""
        result = decode_session_cookie(raw)

        assert isinstance(result, Failure)
        assert result.error.code is code
        assert result.error.details is not None
        assert result.error.details["reason"] == reason
