"""Security primitives: CSRF, OTP codes, password hashing."""

from gatehouse.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from gatehouse.infrastructure.security.csrf_token_service import CsrfTokenManager
from gatehouse.infrastructure.security.otp_codes import OtpCodeHasher

__all__ = [
    "BcryptPasswordService",
    "CsrfTokenManager",
    "OtpCodeHasher",
]
