"""CSRF error types."""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class CsrfError(DomainError):
    """Anti-forgery token missing or not matching its cookie twin.

    Codes:
        CSRF_TOKEN_MISSING, CSRF_TOKEN_INVALID.
    """

    pass
