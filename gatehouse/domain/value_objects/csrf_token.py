"""CSRF token value object."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class CsrfToken:
    """Anti-forgery token with its validity window.

    A token is reusable until it expires; it is an anti-forgery value, not a
    nonce.

    Attributes:
        value: 64 lowercase hex characters (32 random bytes).
        issued_at: When the token was minted.
        expires_at: End of the validity window.
    """

    value: str
    issued_at: datetime
    expires_at: datetime

    @property
    def expires_in(self) -> int:
        """Lifetime in whole seconds, as reported to clients."""
        return int((self.expires_at - self.issued_at).total_seconds())
