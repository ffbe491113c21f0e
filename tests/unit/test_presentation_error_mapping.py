"""Unit tests for domain-error to HTTP mapping and path policies."""

import pytest

from gatehouse.core.enums import ErrorCode
from gatehouse.core.errors import DomainError
from gatehouse.domain.value_objects import RateLimitPolicy
from gatehouse.presentation.routers.api.middleware import policy_for_path
from gatehouse.presentation.routers.api.v1.errors import http_error_for


def _error(code: ErrorCode, message: str = "internal detail") -> DomainError:
    return DomainError(code=code, message=message)


@pytest.mark.unit
class TestHttpErrorFor:
    @pytest.mark.parametrize(
        ("code", "status_code"),
        [
            (ErrorCode.UNAUTHORIZED, 401),
            (ErrorCode.SESSION_EXPIRED, 401),
            (ErrorCode.SESSION_SECOND_FACTOR_REQUIRED, 401),
            (ErrorCode.SESSION_COOKIE_MALFORMED, 401),
            (ErrorCode.INVALID_CREDENTIALS, 401),
            (ErrorCode.FORBIDDEN, 403),
            (ErrorCode.CSRF_TOKEN_MISSING, 403),
            (ErrorCode.CSRF_TOKEN_INVALID, 403),
            (ErrorCode.OTP_MISMATCH, 400),
            (ErrorCode.OTP_NOT_FOUND, 400),
            (ErrorCode.OTP_EXPIRED, 400),
            (ErrorCode.OTP_TOO_MANY_ATTEMPTS, 429),
            (ErrorCode.OTP_DELIVERY_FAILED, 502),
            (ErrorCode.VALIDATION_FAILED, 422),
            (ErrorCode.TIMEOUT, 500),
            (ErrorCode.DATABASE_ERROR, 500),
        ],
    )
    def test_status_codes(self, code: ErrorCode, status_code: int) -> None:
        assert http_error_for(_error(code)).status_code == status_code

    def test_session_reasons_are_not_revealed(self) -> None:
        """Should answer every session failure with the same detail."""
        details = {
            http_error_for(_error(code)).detail
            for code in (
                ErrorCode.SESSION_NOT_FOUND,
                ErrorCode.SESSION_EXPIRED,
                ErrorCode.SESSION_SECOND_FACTOR_REQUIRED,
            )
        }

        assert details == {"Authentication required"}

    def test_otp_reasons_are_not_revealed(self) -> None:
        """Should not tell mismatch from expiry or absence."""
        errors = [
            http_error_for(_error(code))
            for code in (ErrorCode.OTP_MISMATCH, ErrorCode.OTP_NOT_FOUND, ErrorCode.OTP_EXPIRED)
        ]

        assert {e.detail for e in errors} == {"Invalid or expired code"}
        assert {e.slug for e in errors} == {"otp_invalid"}

    def test_internal_errors_hide_message(self) -> None:
        exc = http_error_for(_error(ErrorCode.TIMEOUT, "session.save timed out"))

        assert "session.save" not in exc.detail


@pytest.mark.unit
class TestPolicyForPath:
    @pytest.mark.parametrize(
        ("path", "policy"),
        [
            ("/api/v1/admin/auth/login", RateLimitPolicy.AUTH),
            ("/api/v1/admin/auth/2fa/send-code", RateLimitPolicy.AUTH),
            ("/api/v1/admin/auth/2fa/verify-code", RateLimitPolicy.AUTH),
            ("/api/v1/auth/otp/send", RateLimitPolicy.STRICT),
            ("/api/v1/auth/otp/verify", RateLimitPolicy.AUTH),
            ("/api/v1/csrf", RateLimitPolicy.AUTH),
            ("/api/v1/admin/sessions", RateLimitPolicy.STANDARD),
            ("/api/v1/admin/audit-logs", RateLimitPolicy.STANDARD),
        ],
    )
    def test_policies(self, path: str, policy: RateLimitPolicy) -> None:
        assert policy_for_path(path, "/api/v1") is policy

    @pytest.mark.parametrize("path", ["/", "/health", "/docs"])
    def test_outside_prefix_is_not_limited(self, path: str) -> None:
        assert policy_for_path(path, "/api/v1") is None
