"""API tests for admin login and the two-factor gate."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from gatehouse.core.config import Settings
from gatehouse.core.container import Container, build_container
from gatehouse.domain.entities import AdminUser
from gatehouse.main import create_app
from tests.utils.auth_helpers import (
    ADMIN_PASSWORD,
    API,
    FailingEmailAdapter,
    audit_actions,
    csrf_headers,
    last_code,
    login_admin,
)


def _login(client: TestClient, email: str, password: str = ADMIN_PASSWORD):
    headers = csrf_headers(client)
    response = client.post(
        f"{API}/admin/auth/login",
        json={"email": email, "password": password},
        headers=headers,
    )
    return response, headers


@pytest.mark.api
class TestAdminLogin:
    def test_valid_credentials_open_unverified_session(
        self, client: TestClient, admin: AdminUser
    ) -> None:
        """Should set the session cookie and ask for the second factor."""
        response, _ = _login(client, admin.email)

        assert response.status_code == 200
        body = response.json()
        assert body["two_factor_required"] is True
        assert body["session_id"]
        assert client.cookies.get("admin_session_token")
        assert "samesite=lax" in response.headers["set-cookie"].lower()

    def test_email_is_case_insensitive(
        self, client: TestClient, admin: AdminUser
    ) -> None:
        response, _ = _login(client, admin.email.upper())

        assert response.status_code == 200

    @pytest.mark.parametrize(
        ("email", "password"),
        [
            ("admin@example.com", "wrong password"),
            ("nobody@example.com", ADMIN_PASSWORD),
        ],
    )
    def test_bad_credentials_share_one_answer(
        self, client: TestClient, admin: AdminUser, email: str, password: str
    ) -> None:
        """Should not reveal whether the email exists."""
        response, _ = _login(client, email, password)

        assert response.status_code == 401
        problem = response.json()
        assert problem["type"].endswith("/errors/invalid_credentials")
        assert problem["detail"] == "Invalid email or password"
        assert "admin_session_token" not in client.cookies

    def test_failed_login_is_audited(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        _login(client, admin.email, "wrong password")

        assert audit_actions(container)[0] == "admin.login_failed"

    def test_inactive_admin_cannot_log_in(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        admin.is_active = False
        asyncio.run(container.admin_repository.save(admin))

        response, _ = _login(client, admin.email)

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.api
class TestTwoFactorGate:
    def test_unverified_session_is_refused(
        self, client: TestClient, admin: AdminUser
    ) -> None:
        """Should answer 401 on privileged routes until 2FA completes."""
        _login(client, admin.email)

        response = client.get(f"{API}/admin/auth/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_full_flow_grants_access(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        _, headers = _login(client, admin.email)

        sent = client.post(f"{API}/admin/auth/2fa/send-code", headers=headers)
        assert sent.status_code == 200
        to, subject, _ = container.email.sent[-1]  # type: ignore[attr-defined]
        assert to == admin.email
        assert subject == "Your admin verification code"

        verified = client.post(
            f"{API}/admin/auth/2fa/verify-code",
            json={"code": last_code(container, admin.email)},
            headers=headers,
        )
        assert verified.status_code == 200

        me = client.get(f"{API}/admin/auth/me")
        assert me.status_code == 200
        profile = me.json()
        assert profile["email"] == admin.email
        assert profile["role"] == "admin"
        assert profile["two_factor_verified"] is True

        actions = audit_actions(container)
        for action in (
            "admin.login",
            "admin.two_factor_sent",
            "admin.two_factor_verified",
        ):
            assert action in actions

    def test_wrong_code_is_rejected(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        _, headers = _login(client, admin.email)
        client.post(f"{API}/admin/auth/2fa/send-code", headers=headers)
        code = last_code(container, admin.email)
        wrong = "0" * len(code) if code != "0" * len(code) else "1" * len(code)

        response = client.post(
            f"{API}/admin/auth/2fa/verify-code",
            json={"code": wrong},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["type"].endswith("/errors/otp_invalid")
        assert client.get(f"{API}/admin/auth/me").status_code == 401
        assert "admin.two_factor_failed" in audit_actions(container)

    def test_code_without_challenge_is_rejected(
        self, client: TestClient, admin: AdminUser
    ) -> None:
        _, headers = _login(client, admin.email)

        response = client.post(
            f"{API}/admin/auth/2fa/verify-code",
            json={"code": "123456"},
            headers=headers,
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("code", ["12345", "1234567"])
    def test_wrong_length_is_validation_error(
        self, client: TestClient, admin: AdminUser, code: str
    ) -> None:
        _, headers = _login(client, admin.email)

        response = client.post(
            f"{API}/admin/auth/2fa/verify-code",
            json={"code": code},
            headers=headers,
        )

        assert response.status_code == 422

    def test_non_numeric_code_is_validation_error(
        self, client: TestClient, admin: AdminUser
    ) -> None:
        _, headers = _login(client, admin.email)

        response = client.post(
            f"{API}/admin/auth/2fa/verify-code",
            json={"code": "abcdef"},
            headers=headers,
        )

        assert response.status_code == 422

    def test_send_code_requires_session(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/admin/auth/2fa/send-code", headers=csrf_headers(client)
        )

        assert response.status_code == 401

    def test_delivery_failure_is_bad_gateway(
        self, settings: Settings, admin: AdminUser
    ) -> None:
        """Should answer 502 when the email provider fails."""
        failing = FailingEmailAdapter()
        container = build_container(settings, email=failing)
        asyncio.run(container.admin_repository.save(admin))

        with TestClient(create_app(settings, container=container)) as client:
            _, headers = _login(client, admin.email)
            response = client.post(f"{API}/admin/auth/2fa/send-code", headers=headers)

        assert response.status_code == 502
        assert response.json()["type"].endswith("/errors/otp_delivery_failed")
        assert failing.attempts == 1


@pytest.mark.api
class TestAdminLogout:
    def test_logout_revokes_session(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email)
        token = client.cookies.get("admin_session_token")

        response = client.post(f"{API}/admin/auth/logout", headers=headers)

        assert response.status_code == 200
        assert "admin_session_token" not in client.cookies
        replayed = client.get(
            f"{API}/admin/auth/me",
            headers={"Cookie": f"admin_session_token={token}"},
        )
        assert replayed.status_code == 401
        assert "admin.logout" in audit_actions(container)

    def test_pending_session_can_log_out(
        self, client: TestClient, container: Container, admin: AdminUser
    ) -> None:
        headers = login_admin(client, container, admin.email, verify=False)

        response = client.post(f"{API}/admin/auth/logout", headers=headers)

        assert response.status_code == 200

    def test_logout_without_session(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/admin/auth/logout", headers=csrf_headers(client)
        )

        assert response.status_code == 401
