"""Typed decode of the session cookie.

The cookie carries one opaque token. Anything else (absent, empty, wrong
length, non-hex) is a ``CookieDecodeError`` that the caller has to handle;
there is no silent fallback to an anonymous request.
"""

from dataclasses import dataclass

from gatehouse.core.constants import TOKEN_HEX_LENGTH
from gatehouse.core.enums import ErrorCode
from gatehouse.core.result import Failure, Result, Success
from gatehouse.core.tokens import is_well_formed_token
from gatehouse.domain.errors import CookieDecodeError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionCookie:
    """A syntactically valid session cookie.

    Attributes:
        token: The raw session token (never logged).
    """

    token: str


def decode_session_cookie(raw: str | None) -> Result[SessionCookie, CookieDecodeError]:
    """Decode a session cookie value.

    Returns:
        Success(SessionCookie) for a well-formed token.
        Failure(CookieDecodeError) with reason missing, wrong_length or malformed.
    """
    if not raw:
        return Failure(
            error=CookieDecodeError(
                code=ErrorCode.SESSION_COOKIE_MISSING,
                message="Session cookie missing",
                details={"reason": "missing"},
            )
        )

    value = raw.strip()
    if len(value) != TOKEN_HEX_LENGTH:
        return Failure(
            error=CookieDecodeError(
                code=ErrorCode.SESSION_COOKIE_MALFORMED,
                message="Session cookie has the wrong length",
                details={"reason": "wrong_length", "length": str(len(value))},
            )
        )

    if not is_well_formed_token(value):
        return Failure(
            error=CookieDecodeError(
                code=ErrorCode.SESSION_COOKIE_MALFORMED,
                message="Session cookie is not a token",
                details={"reason": "malformed"},
            )
        )

    return Success(value=SessionCookie(token=value))
