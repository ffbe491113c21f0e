"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (database,
cache, email). They inherit from DomainError, not Exception, and travel
inside Result types like every other error.
"""

from dataclasses import dataclass

from gatehouse.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Database failure (connection loss, constraint violation, timeout)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Redis failure."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalServiceError(InfrastructureError):
    """Failure of an outbound service such as the email sender.

    Attributes:
        service_name: Name of the external service.
    """

    service_name: str
