"""Core errors package.

Usage:
    from gatehouse.core.errors import DomainError, ValidationError, NotFoundError
"""

from gatehouse.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from gatehouse.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "AuthenticationError",
    "AuthorizationError",
]
