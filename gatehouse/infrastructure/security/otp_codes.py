"""OTP code generation and hashing.

Codes are uniform over all ``10**length`` values (leading zeros allowed).
Each challenge gets its own random salt, and the digest is an HMAC-SHA256
keyed with the server secret, so a dump of the challenge table alone does
not allow an offline search of the small code space.
"""

import hashlib
import hmac
import secrets

from gatehouse.core.constants import OTP_SALT_BYTES


class OtpCodeHasher:
    """Generate, hash and check one-time codes.

    Args:
        secret_key: Server-side pepper.
        code_length: Digits per code.
    """

    def __init__(self, *, secret_key: str, code_length: int = 6) -> None:
        self._key = secret_key.encode("utf-8")
        self._code_length = code_length

    @property
    def code_length(self) -> int:
        """Digits per code."""
        return self._code_length

    def generate_code(self) -> str:
        """New zero-padded numeric code."""
        return f"{secrets.randbelow(10**self._code_length):0{self._code_length}d}"

    @staticmethod
    def new_salt() -> str:
        """Random per-challenge salt (hex)."""
        return secrets.token_hex(OTP_SALT_BYTES)

    def hash_code(self, code: str, salt: str) -> str:
        """Hex digest of ``code`` under ``salt``."""
        message = f"{salt}:{code}".encode("utf-8")
        return hmac.new(self._key, message, hashlib.sha256).hexdigest()

    def matches(self, code: str, *, salt: str, code_hash: str) -> bool:
        """Constant-time check of a submitted code against a stored digest."""
        return hmac.compare_digest(self.hash_code(code, salt), code_hash)
