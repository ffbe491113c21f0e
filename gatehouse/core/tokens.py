"""Opaque token helpers shared by sessions and CSRF.

Tokens are 32 bytes from ``secrets`` rendered as 64 lowercase hex
characters. Sessions persist only ``hash_token(token)``.
"""

import hashlib
import re
import secrets

from gatehouse.core.constants import TOKEN_BYTES, TOKEN_HEX_LENGTH

_TOKEN_PATTERN = re.compile(rf"[0-9a-f]{{{TOKEN_HEX_LENGTH}}}")


def generate_token() -> str:
    """New random token (64 hex characters)."""
    return secrets.token_hex(TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a token, used as the storage key."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def is_well_formed_token(value: str | None) -> bool:
    """True for exactly 64 lowercase hex characters."""
    return value is not None and _TOKEN_PATTERN.fullmatch(value) is not None
