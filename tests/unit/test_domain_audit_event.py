"""Unit tests for AuditEvent, AuditFilters and AuditStats."""

from datetime import UTC, datetime, timedelta

import pytest

from gatehouse.domain.entities import AuditEvent, AuditFilters, AuditStats
from gatehouse.domain.enums import AdminRole, AuditAction, AuditStatus

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.mark.unit
class TestAuditEvent:
    def test_ids_are_unique_and_time_ordered(self) -> None:
        first = AuditEvent(action=AuditAction.ADMIN_LOGIN)
        second = AuditEvent(action=AuditAction.ADMIN_LOGIN)

        assert first.id != second.id
        assert first.id < second.id

    def test_event_is_immutable(self) -> None:
        event = AuditEvent(action=AuditAction.ADMIN_LOGIN)

        with pytest.raises(AttributeError):
            event.details = "changed"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("action", "status", "expected"),
        [
            (AuditAction.ADMIN_LOGIN, AuditStatus.SUCCESS, False),
            (AuditAction.ADMIN_LOGIN_FAILED, AuditStatus.FAILURE, True),
            (AuditAction.SECURITY_CSRF_VIOLATION, AuditStatus.SUCCESS, True),
            (AuditAction.SECURITY_RATE_LIMIT_EXCEEDED, AuditStatus.FAILURE, True),
        ],
    )
    def test_is_violation(
        self, action: AuditAction, status: AuditStatus, expected: bool
    ) -> None:
        assert AuditEvent(action=action, status=status).is_violation is expected


@pytest.mark.unit
class TestAuditFilters:
    EVENT = AuditEvent(
        action=AuditAction.SESSION_REVOKED,
        actor_id="admin-1",
        resource_type="session",
        resource_id="s-1",
        created_at=NOW,
    )

    def test_empty_filter_matches_everything(self) -> None:
        assert AuditFilters().matches(self.EVENT) is True

    def test_matching_fields(self) -> None:
        filters = AuditFilters(
            actor_id="admin-1",
            action=AuditAction.SESSION_REVOKED,
            resource_type="session",
            resource_id="s-1",
            start=NOW - timedelta(minutes=1),
            end=NOW,
        )

        assert filters.matches(self.EVENT) is True

    @pytest.mark.parametrize(
        "filters",
        [
            AuditFilters(actor_id="admin-2"),
            AuditFilters(action=AuditAction.ADMIN_LOGIN),
            AuditFilters(resource_type="otp_challenge"),
            AuditFilters(resource_id="s-2"),
            AuditFilters(start=NOW + timedelta(seconds=1)),
            AuditFilters(end=NOW - timedelta(seconds=1)),
        ],
    )
    def test_non_matching_fields(self, filters: AuditFilters) -> None:
        assert filters.matches(self.EVENT) is False


@pytest.mark.unit
class TestAuditStats:
    def test_from_events(self) -> None:
        events = [
            AuditEvent(action=AuditAction.ADMIN_LOGIN, endpoint="/login"),
            AuditEvent(
                action=AuditAction.ADMIN_LOGIN_FAILED,
                status=AuditStatus.FAILURE,
                endpoint="/login",
            ),
            AuditEvent(action=AuditAction.SECURITY_CSRF_VIOLATION, endpoint="/x"),
            AuditEvent(action=AuditAction.SESSION_CLEANUP),
        ]

        stats = AuditStats.from_events(events)

        assert stats.total == 4
        assert stats.violations == 2
        assert stats.by_action == {
            "admin.login": 1,
            "admin.login_failed": 1,
            "security.csrf_violation": 1,
            "session.cleanup": 1,
        }
        assert stats.by_endpoint == {"/login": 2, "/x": 1}

    def test_empty(self) -> None:
        stats = AuditStats.from_events([])

        assert stats.total == 0
        assert stats.violations == 0


@pytest.mark.unit
class TestAdminRole:
    def test_role_order(self) -> None:
        assert AdminRole.SUPER_ADMIN.satisfies(AdminRole.ADMIN) is True
        assert AdminRole.SUPER_ADMIN.satisfies(AdminRole.SUPER_ADMIN) is True
        assert AdminRole.ADMIN.satisfies(AdminRole.SUPER_ADMIN) is False
