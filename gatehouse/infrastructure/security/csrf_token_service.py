"""CSRF token manager.

Double-submit scheme: the token is set as an HTTP-only ``csrf_token`` cookie
and also returned in the response body. Clients echo the body value back in
the ``X-CSRF-Token`` header on state-changing requests, and the two copies
must match byte for byte.

Security:
    - 32 random bytes from ``secrets`` (256 bits)
    - ``hmac.compare_digest`` comparison, no early exit on the first
      differing byte
    - Missing or malformed values on either side are rejected
    - Tokens are reusable until they expire; they are not nonces
"""

import hmac
from datetime import UTC, datetime, timedelta

from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Result, Success
from gatehouse.domain.errors import CsrfError
from gatehouse.domain.value_objects import CsrfToken
from gatehouse.core.tokens import generate_token, is_well_formed_token


class CsrfTokenManager:
    """Issues and validates anti-forgery tokens.

    Args:
        ttl_seconds: Token lifetime (cookie max-age and reported expires_in).

    Example:
        >>> manager = CsrfTokenManager(ttl_seconds=86400)
        >>> token = manager.issue_token()
        >>> token.expires_in
        86400
        >>> manager.validate_token(token.value, token.value)
        True
    """

    def __init__(self, *, ttl_seconds: int = 86400) -> None:
        if ttl_seconds <= 0:
            msg = "ttl_seconds must be positive"
            raise ValueError(msg)
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        """Configured token lifetime."""
        return self._ttl_seconds

    def issue_token(self) -> CsrfToken:
        """Mint a new token valid for ``ttl_seconds``."""
        issued_at = datetime.now(UTC)
        return CsrfToken(
            value=generate_token(),
            issued_at=issued_at,
            expires_at=issued_at + timedelta(seconds=self._ttl_seconds),
        )

    def validate_token(self, presented: str | None, stored: str | None) -> bool:
        """Constant-time comparison of the presented and stored tokens.

        Returns:
            True only when both are well-formed and identical.
        """
        return isinstance(self.check(presented, stored), Success)

    def check(self, presented: str | None, stored: str | None) -> Result[None, CsrfError]:
        """Like ``validate_token`` but says which side was wrong.

        Returns:
            Success(None) on match, Failure(CsrfError) otherwise.
        """
        if not presented or not stored:
            return Failure(
                error=CsrfError(
                    code=ErrorCode.CSRF_TOKEN_MISSING,
                    message="CSRF token missing",
                )
            )

        if not (is_well_formed_token(presented) and is_well_formed_token(stored)):
            return Failure(
                error=CsrfError(
                    code=ErrorCode.CSRF_TOKEN_INVALID,
                    message="CSRF token invalid",
                )
            )

        if not hmac.compare_digest(presented.encode("ascii"), stored.encode("ascii")):
            return Failure(
                error=CsrfError(
                    code=ErrorCode.CSRF_TOKEN_INVALID,
                    message="CSRF token invalid",
                )
            )

        return Success(value=None)
