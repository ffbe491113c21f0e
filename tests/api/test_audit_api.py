"""API tests for the audit trail, statistics and export."""

import csv
import io

import pytest
from fastapi.testclient import TestClient

from gatehouse.core.container import Container
from gatehouse.domain.entities import AdminUser
from tests.utils.auth_helpers import API, audit_actions, login_admin


@pytest.mark.api
class TestAuditLogs:
    def test_requires_authentication(
        self, client: TestClient, container: Container
    ) -> None:
        """Should answer 401 and audit the unauthorized attempt."""
        response = client.get(f"{API}/admin/audit-logs")

        assert response.status_code == 401
        assert response.json()["type"].endswith("/errors/unauthorized")
        assert audit_actions(container)[0] == "security.unauthorized"

    def test_lists_newest_first(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)

        response = client.get(f"{API}/admin/audit-logs")

        assert response.status_code == 200
        body = response.json()
        assert body["limit"] == 50
        assert body["offset"] == 0
        actions = [e["action"] for e in body["events"]]
        assert actions.index("admin.two_factor_verified") < actions.index(
            "admin.login"
        )

    def test_filter_by_action_and_actor(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)

        response = client.get(
            f"{API}/admin/audit-logs",
            params={"action": "admin.login", "actor_id": str(admin.id)},
        )

        events = response.json()["events"]
        assert len(events) == 1
        assert events[0]["actor_type"] == "admin"
        assert events[0]["endpoint"] == f"{API}/admin/auth/login"

    def test_pagination(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)
        everything = client.get(f"{API}/admin/audit-logs").json()["events"]

        page = client.get(
            f"{API}/admin/audit-logs", params={"limit": 1, "offset": 1}
        ).json()["events"]

        assert [e["id"] for e in page] == [everything[1]["id"]]

    @pytest.mark.parametrize("limit", [0, 1001])
    def test_limit_bounds(
        self, client: TestClient, container: Container, admin: AdminUser, limit: int
    ) -> None:
        login_admin(client, container, admin.email)

        response = client.get(f"{API}/admin/audit-logs", params={"limit": limit})

        assert response.status_code == 422

    def test_unknown_action_is_validation_error(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)

        response = client.get(
            f"{API}/admin/audit-logs", params={"action": "nope.nothing"}
        )

        assert response.status_code == 422


@pytest.mark.api
class TestSecurityStats:
    def test_admin_is_forbidden(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)

        response = client.get(f"{API}/admin/security/stats")

        assert response.status_code == 403
        assert response.json()["type"].endswith("/errors/forbidden")

    def test_super_admin_sees_counts(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        login_admin(client, container, super_admin.email)

        response = client.get(f"{API}/admin/security/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["window_seconds"] == 3600
        assert body["active_sessions"] == 1
        assert body["by_action"]["admin.login"] == 1
        assert body["total"] == sum(body["by_action"].values())

    def test_violations_are_counted(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        client.post(f"{API}/auth/logout")  # no CSRF token
        login_admin(client, container, super_admin.email)

        body = client.get(f"{API}/admin/security/stats").json()

        assert body["violations"] >= 1
        assert body["by_action"]["security.csrf_violation"] == 1

    @pytest.mark.parametrize("window", [59, 2592001])
    def test_window_bounds(
        self,
        client: TestClient,
        container: Container,
        super_admin: AdminUser,
        window: int,
    ) -> None:
        login_admin(client, container, super_admin.email)

        response = client.get(
            f"{API}/admin/security/stats", params={"window_seconds": window}
        )

        assert response.status_code == 422


@pytest.mark.api
class TestExport:
    def test_json_export(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        login_admin(client, container, super_admin.email)

        response = client.get(f"{API}/admin/security/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="audit-events.json"'
        )
        actions = {e["action"] for e in response.json()}
        assert "admin.login" in actions

    def test_csv_export(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        login_admin(client, container, super_admin.email)

        response = client.get(
            f"{API}/admin/security/export", params={"format": "csv"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        rows = list(csv.DictReader(io.StringIO(response.text)))
        assert "admin.login" in {row["action"] for row in rows}

    def test_unknown_format(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        login_admin(client, container, super_admin.email)

        response = client.get(
            f"{API}/admin/security/export", params={"format": "xml"}
        )

        assert response.status_code == 422

    def test_admin_is_forbidden(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)

        assert client.get(f"{API}/admin/security/export").status_code == 403
