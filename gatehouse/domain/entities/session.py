"""Session domain entity.

Pure business logic, no framework dependencies.

A Session is one authenticated login instance on one device. It is created
after a primary-credential check, refreshed on every authenticated request,
and destroyed by logout, revocation, or the expiry sweep.

Lifecycle:
    Created(unverified) -> [promote_two_factor] -> Verified -> [revoke|expire] -> gone

Admin sessions start unverified; user sessions start verified. A session
reaches privileged operations only while it is unexpired and verified.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from gatehouse.domain.enums import PrincipalKind


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity with device tracking.

    The raw session token never lives on the entity. Only its SHA-256 digest
    is kept, so a leaked session table cannot be replayed as cookies.

    Attributes:
        id: Public session handle (used for listing and revocation).
        token_hash: SHA-256 hex digest of the opaque cookie token.
        principal_id: Owning admin id or end-user email.
        principal_kind: admin or user.

        Timestamps:
            created_at: When the session was created.
            last_active_at: Last authenticated request.
            expires_at: Hard expiry.

        Client:
            ip_address: Client IP at creation.
            user_agent: Raw User-Agent (truncated).
            fingerprint: SHA-256 of ``ip|user_agent``.
            device_name: "Chrome on macOS".
            device_type: desktop, mobile or tablet.
            browser: Parsed browser family.
            os: Parsed operating system.

        Security:
            two_factor_verified: Second factor cleared for this session.

    Example:
        >>> session = Session(
        ...     id=uuid7(),
        ...     token_hash="ab" * 32,
        ...     principal_id="admin-1",
        ...     principal_kind=PrincipalKind.ADMIN,
        ...     expires_at=datetime.now(UTC) + timedelta(days=7),
        ... )
        >>> session.permits_privileged_access()
        False
        >>> session.mark_two_factor_verified()
        >>> session.permits_privileged_access()
        True
    """

    id: UUID
    token_hash: str
    principal_id: str
    principal_kind: PrincipalKind

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_active_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime

    ip_address: str | None = None
    user_agent: str | None = None
    fingerprint: str | None = None
    device_name: str | None = None
    device_type: str | None = None
    browser: str | None = None
    os: str | None = None

    two_factor_verified: bool = False

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``now`` has reached ``expires_at``."""
        current = now or datetime.now(UTC)
        return current >= self.expires_at

    def needs_second_factor(self) -> bool:
        """True for an admin session that has not cleared its second factor."""
        return (
            self.principal_kind is PrincipalKind.ADMIN and not self.two_factor_verified
        )

    def permits_privileged_access(self, now: datetime | None = None) -> bool:
        """Whether this session may reach privileged operations.

        Holds iff the session is unexpired and either belongs to a user or
        has cleared its second factor.
        """
        return not self.is_expired(now) and not self.needs_second_factor()

    def mark_two_factor_verified(self) -> None:
        """Flip the second-factor flag.

        Idempotent. The flag is never cleared; only revocation ends a
        verified session.
        """
        self.two_factor_verified = True

    def touch(self, now: datetime | None = None) -> None:
        """Record activity on this session."""
        self.last_active_at = now or datetime.now(UTC)
