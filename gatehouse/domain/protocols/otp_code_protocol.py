"""OTP code port: generation and salted hashing of one-time codes."""

from typing import Protocol


class OtpCodeProtocol(Protocol):
    """Generate and check one-time codes without storing plaintext."""

    @property
    def code_length(self) -> int:
        """Digits per code."""
        ...

    def generate_code(self) -> str:
        """New numeric code from a secure random source."""
        ...

    def new_salt(self) -> str:
        """Fresh per-challenge salt."""
        ...

    def hash_code(self, code: str, salt: str) -> str:
        """Digest of ``code`` under ``salt``."""
        ...

    def matches(self, code: str, *, salt: str, code_hash: str) -> bool:
        """Constant-time comparison of ``code`` against a stored digest."""
        ...
