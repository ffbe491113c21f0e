"""Audit event domain entity.

Immutable record of a security-relevant action. Events are append-only; the
core never updates or deletes them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from gatehouse.domain.enums import ActorType, AuditAction, AuditStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditEvent:
    """Audit trail entry.

    Attributes:
        id: Event identifier (time-ordered UUIDv7).
        action: What happened.
        actor_id: Who did it (None for anonymous callers).
        actor_type: user, admin or system.
        resource_type: Kind of thing affected (session, otp_challenge, ...).
        resource_id: Identifier of the affected thing.
        status: success or failure.
        details: Free-form description.
        endpoint: Request path that produced the event.
        ip_address: Client IP.
        user_agent: Client User-Agent.
        created_at: When it happened.
    """

    action: AuditAction
    id: UUID = field(default_factory=uuid7)
    actor_id: str | None = None
    actor_type: ActorType = ActorType.SYSTEM
    resource_type: str | None = None
    resource_id: str | None = None
    status: AuditStatus = AuditStatus.SUCCESS
    details: str | None = None
    endpoint: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_violation(self) -> bool:
        """Failed actions and boundary rejections count as violations."""
        return self.status is AuditStatus.FAILURE or self.action.is_violation


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditFilters:
    """Filters for audit queries. None means "any"."""

    actor_id: str | None = None
    action: AuditAction | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def matches(self, event: AuditEvent) -> bool:
        """In-memory predicate equivalent of the database filter."""
        if self.actor_id is not None and event.actor_id != self.actor_id:
            return False
        if self.action is not None and event.action is not self.action:
            return False
        if self.resource_type is not None and event.resource_type != self.resource_type:
            return False
        if self.resource_id is not None and event.resource_id != self.resource_id:
            return False
        if self.start is not None and event.created_at < self.start:
            return False
        if self.end is not None and event.created_at > self.end:
            return False
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditStats:
    """Aggregate counts over a time window.

    Attributes:
        total: Events in the window.
        by_action: Count per action value.
        by_endpoint: Count per endpoint.
        violations: Failed or security.* events.
    """

    total: int
    by_action: dict[str, int]
    by_endpoint: dict[str, int]
    violations: int

    @classmethod
    def from_events(cls, events: list[AuditEvent]) -> "AuditStats":
        """Aggregate a list of events."""
        by_action: dict[str, int] = {}
        by_endpoint: dict[str, int] = {}
        violations = 0
        for event in events:
            by_action[event.action.value] = by_action.get(event.action.value, 0) + 1
            if event.endpoint:
                by_endpoint[event.endpoint] = by_endpoint.get(event.endpoint, 0) + 1
            if event.is_violation:
                violations += 1
        return cls(
            total=len(events),
            by_action=by_action,
            by_endpoint=by_endpoint,
            violations=violations,
        )
