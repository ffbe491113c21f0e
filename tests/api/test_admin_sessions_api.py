"""API tests for admin session management."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from gatehouse.core.container import Container
from gatehouse.domain.entities import AdminUser
from tests.utils.auth_helpers import API, audit_actions, login_admin

PHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


def _second_device(client: TestClient) -> TestClient:
    """Another browser against the same running app."""
    return TestClient(client.app, headers={"User-Agent": PHONE_UA})


@pytest.mark.api
class TestListSessions:
    def test_lists_own_sessions_current_first_flagged(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email)
        phone = _second_device(client)
        login_admin(phone, container, admin.email)

        response = client.get(f"{API}/admin/sessions")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        current = [s for s in body["sessions"] if s["is_current"]]
        assert len(current) == 1
        devices = {s["device_type"] for s in body["sessions"]}
        assert "mobile" in devices

    def test_other_admins_sessions_are_not_listed(
        self,
        client: TestClient,
        container: Container,
        admin: AdminUser,
        super_admin: AdminUser,
    ) -> None:
        login_admin(client, container, admin.email)
        other = _second_device(client)
        login_admin(other, container, super_admin.email)

        body = client.get(f"{API}/admin/sessions").json()

        assert body["total"] == 1

    def test_requires_verified_session(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        login_admin(client, container, admin.email, verify=False)

        assert client.get(f"{API}/admin/sessions").status_code == 401


@pytest.mark.api
class TestRevokeSession:
    def test_revoke_other_session(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        """Should log the other device out."""
        headers = login_admin(client, container, admin.email)
        phone = _second_device(client)
        login_admin(phone, container, admin.email)
        sessions = client.get(f"{API}/admin/sessions").json()["sessions"]
        other_id = next(s["id"] for s in sessions if not s["is_current"])

        response = client.delete(f"{API}/admin/sessions/{other_id}", headers=headers)

        assert response.status_code == 204
        assert phone.get(f"{API}/admin/auth/me").status_code == 401
        assert client.get(f"{API}/admin/auth/me").status_code == 200
        assert "session.revoked" in audit_actions(container)

    def test_current_session_cannot_be_revoked(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)
        current_id = client.get(f"{API}/admin/auth/me").json()["session_id"]

        response = client.delete(f"{API}/admin/sessions/{current_id}", headers=headers)

        assert response.status_code == 400
        assert client.get(f"{API}/admin/auth/me").status_code == 200

    def test_unknown_session_is_no_op(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)

        response = client.delete(f"{API}/admin/sessions/{uuid4()}", headers=headers)

        assert response.status_code == 204
        assert "session.revoked" not in audit_actions(container)

    def test_cannot_revoke_another_admins_session(
        self,
        client: TestClient,
        container: Container,
        admin: AdminUser,
        super_admin: AdminUser,
    ) -> None:
        headers = login_admin(client, container, admin.email)
        other = _second_device(client)
        login_admin(other, container, super_admin.email)
        other_id = other.get(f"{API}/admin/auth/me").json()["session_id"]

        response = client.delete(f"{API}/admin/sessions/{other_id}", headers=headers)

        assert response.status_code == 204
        assert other.get(f"{API}/admin/auth/me").status_code == 200

    def test_malformed_id_is_validation_error(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)

        response = client.delete(f"{API}/admin/sessions/not-a-uuid", headers=headers)

        assert response.status_code == 422


@pytest.mark.api
class TestRevokeAll:
    def test_keeps_current_session(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)
        devices = [_second_device(client) for _ in range(2)]
        for device in devices:
            login_admin(device, container, admin.email)

        response = client.delete(f"{API}/admin/sessions", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"revoked_count": 2}
        assert client.get(f"{API}/admin/auth/me").status_code == 200
        for device in devices:
            assert device.get(f"{API}/admin/auth/me").status_code == 401


@pytest.mark.api
class TestRefreshAndCleanup:
    def test_refresh_returns_current_session(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)

        response = client.post(f"{API}/admin/sessions/refresh", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["is_current"] is True
        assert body["two_factor_verified"] is True

    def test_cleanup_requires_super_admin(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)

        response = client.post(f"{API}/admin/sessions/cleanup", headers=headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient privileges"

    def test_super_admin_can_clean_up(
        self, client: TestClient, container: Container, super_admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, super_admin.email)

        response = client.post(f"{API}/admin/sessions/cleanup", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"deleted_count": 0}
        assert "session.cleanup" in audit_actions(container)
