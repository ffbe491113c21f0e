"""Common error classes used across all domains and layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- AuthenticationError: Caller is not authenticated (HTTP 401)
- AuthorizationError: Caller lacks privilege (HTTP 403)

Usage:
    from gatehouse.core.errors import AuthenticationError
    from gatehouse.core.enums import ErrorCode

    return Failure(error=AuthenticationError(
        code=ErrorCode.UNAUTHORIZED,
        message="Authentication required",
    ))
"""

from dataclasses import dataclass

from gatehouse.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (session, otp_challenge, ...).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (no session, expired, unverified, bad credentials)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (authenticated but insufficient privilege).

    Attributes:
        required_role: Role that was required.
    """

    required_role: str | None = None
