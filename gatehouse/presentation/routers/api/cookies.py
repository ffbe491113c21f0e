"""Session and CSRF cookie writers.

Session cookies: HttpOnly, SameSite=Lax, Secure in production.
CSRF cookie: HttpOnly, SameSite=Strict, Secure in production.
"""

from datetime import timedelta

from starlette.responses import Response

from gatehouse.core.constants import CSRF_COOKIE


def set_session_cookie(
    response: Response,
    *,
    name: str,
    token: str,
    ttl: timedelta,
    secure: bool,
) -> None:
    response.set_cookie(
        key=name,
        value=token,
        max_age=int(ttl.total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=secure,
    )


def clear_session_cookie(response: Response, *, name: str, secure: bool) -> None:
    response.delete_cookie(
        key=name, path="/", httponly=True, samesite="lax", secure=secure
    )


def set_csrf_cookie(
    response: Response, *, token: str, max_age: int, secure: bool
) -> None:
    response.set_cookie(
        key=CSRF_COOKIE,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="strict",
        secure=secure,
    )
