"""Unit tests for configuration management (flat Settings)."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.enums import Environment, RateLimitBackend, StorageBackend


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)  # type: ignore[arg-type]


@pytest.mark.unit
class TestDefaults:
    def test_defaults(self) -> None:
        """Should match the documented defaults."""
        settings = _settings()

        assert settings.environment is Environment.DEVELOPMENT
        assert settings.admin_session_ttl_days == 7
        assert settings.user_session_ttl_days == 30
        assert settings.csrf_token_ttl_seconds == 86400
        assert settings.otp_code_length == 6
        assert settings.otp_ttl_minutes == 10
        assert settings.otp_max_attempts == 5
        assert settings.storage_backend is StorageBackend.DATABASE
        assert settings.rate_limit_backend is RateLimitBackend.REDIS
        assert settings.secure_cookies is False
        assert settings.trusted_proxy_list == ()

    def test_environment_variables(self) -> None:
        env = {
            "ENVIRONMENT": "testing",
            "STORAGE_BACKEND": "memory",
            "OTP_CODE_LENGTH": "8",
            "API_BASE_URL": "https://auth.example.com/",
        }
        with patch.dict(os.environ, env, clear=True):
            get_settings.cache_clear()
            settings = get_settings()
        get_settings.cache_clear()

        assert settings.is_testing is True
        assert settings.storage_backend is StorageBackend.MEMORY
        assert settings.otp_code_length == 8
        assert settings.api_base_url == "https://auth.example.com"


@pytest.mark.unit
class TestValidation:
    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_out_of_range(self, rounds: int) -> None:
        with pytest.raises(ValidationError, match="bcrypt_rounds must be between 4 and 31"):
            _settings(bcrypt_rounds=rounds)

    @pytest.mark.parametrize("length", [3, 11])
    def test_otp_code_length_out_of_range(self, length: int) -> None:
        with pytest.raises(ValidationError, match="otp_code_length"):
            _settings(otp_code_length=length)

    @pytest.mark.parametrize(
        "field",
        [
            "admin_session_ttl_days",
            "user_session_ttl_days",
            "csrf_token_ttl_seconds",
            "otp_ttl_minutes",
            "otp_max_attempts",
            "audit_fallback_capacity",
        ],
    )
    def test_non_positive_values(self, field: str) -> None:
        with pytest.raises(ValidationError, match="must be positive"):
            _settings(**{field: 0})

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="store_timeout_seconds"):
            _settings(store_timeout_seconds=0)

    def test_production_needs_real_secret(self) -> None:
        """Should refuse to start production with the development secret."""
        with pytest.raises(ValidationError, match="secret_key must be set in production"):
            _settings(environment=Environment.PRODUCTION)

    def test_production_uses_secure_cookies(self) -> None:
        settings = _settings(environment=Environment.PRODUCTION, secret_key="a-real-secret")

        assert settings.is_production is True
        assert settings.secure_cookies is True


@pytest.mark.unit
class TestTrustedProxies:
    def test_comma_separated_entries(self) -> None:
        settings = _settings(trusted_proxies=" 10.0.0.0/8, ,127.0.0.1 ")

        assert settings.trusted_proxies == "10.0.0.0/8,127.0.0.1"
        assert settings.trusted_proxy_list == ("10.0.0.0/8", "127.0.0.1")

    def test_from_environment(self) -> None:
        with patch.dict(os.environ, {"TRUSTED_PROXIES": "*"}, clear=False):
            settings = _settings()

        assert settings.trusted_proxy_list == ("*",)
