"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising. Callers branch
on the two arms with ``match``, which keeps every failure path visible at the
call site.

Usage:
    def decode(raw: str | None) -> Result[SessionCookie, CookieDecodeError]:
        if not raw:
            return Failure(error=CookieDecodeError(...))
        return Success(value=SessionCookie(token=raw))

    match decode(request.cookies.get(name)):
        case Success(value=cookie):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result = Success[T] | Failure[E]
