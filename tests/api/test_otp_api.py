"""API tests for end-user OTP login."""

import pytest
from fastapi.testclient import TestClient

from gatehouse.core.config import Settings
from gatehouse.core.container import Container, build_container
from gatehouse.main import create_app
from tests.utils.auth_helpers import (
    API,
    FailingEmailAdapter,
    audit_actions,
    csrf_headers,
    last_code,
)

EMAIL = "user@example.com"


def _send(client: TestClient, headers: dict[str, str], **payload: str):
    return client.post(
        f"{API}/auth/otp/send", json={"email": EMAIL, **payload}, headers=headers
    )


def _verify(client: TestClient, headers: dict[str, str], code: str, **payload: str):
    return client.post(
        f"{API}/auth/otp/verify",
        json={"email": EMAIL, "code": code, **payload},
        headers=headers,
    )


def _wrong(code: str) -> str:
    return "".join("1" if c == "0" else "0" for c in code)


@pytest.mark.api
class TestSendCode:
    def test_accepted_and_emailed(
        self, client: TestClient, container: Container
    ) -> None:
        response = _send(client, csrf_headers(client))

        assert response.status_code == 202
        to, subject, _ = container.email.sent[-1]  # type: ignore[attr-defined]
        assert to == EMAIL
        assert subject == "Your login code"
        assert len(last_code(container, EMAIL)) == 6
        assert "otp.requested" in audit_actions(container)

    def test_same_answer_when_delivery_fails(
        self, client: TestClient, settings: Settings
    ) -> None:
        """Should not reveal whether the email could be delivered."""
        expected = _send(client, csrf_headers(client))

        container = build_container(settings, email=FailingEmailAdapter())
        with TestClient(create_app(settings, container=container)) as failing:
            response = _send(failing, csrf_headers(failing))

        assert response.status_code == expected.status_code == 202
        assert response.json() == expected.json()

    def test_registration_subject(
        self, client: TestClient, container: Container
    ) -> None:
        _send(client, csrf_headers(client), purpose="registration")

        assert container.email.sent[-1][1] == "Verify your registration"  # type: ignore[attr-defined]

    def test_two_factor_purpose_is_rejected(self, client: TestClient) -> None:
        response = _send(client, csrf_headers(client), purpose="two_factor")

        assert response.status_code == 422

    def test_new_code_supersedes_old(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers)
        first = last_code(container, EMAIL)
        _send(client, headers)
        second = last_code(container, EMAIL)

        if first != second:
            assert _verify(client, headers, first).status_code == 400
        assert _verify(client, headers, second).status_code == 200


@pytest.mark.api
class TestVerifyCode:
    def test_login_code_opens_user_session(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers)

        response = _verify(client, headers, last_code(container, EMAIL))

        assert response.status_code == 200
        body = response.json()
        assert body["verified"] is True
        assert body["session_id"]
        assert client.cookies.get("user_session_token")
        actions = audit_actions(container)
        assert "otp.verified" in actions
        assert "user.login" in actions

    def test_registration_code_opens_no_session(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers, purpose="registration")

        response = _verify(
            client, headers, last_code(container, EMAIL), purpose="registration"
        )

        assert response.status_code == 200
        assert response.json()["session_id"] is None
        assert "user_session_token" not in client.cookies

    def test_code_is_single_use(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers)
        code = last_code(container, EMAIL)

        assert _verify(client, headers, code).status_code == 200
        assert _verify(client, headers, code).status_code == 400

    def test_code_for_other_purpose_is_rejected(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers, purpose="verification")

        response = _verify(client, headers, last_code(container, EMAIL))

        assert response.status_code == 400

    def test_wrong_code(self, client: TestClient, container: Container) -> None:
        headers = csrf_headers(client)
        _send(client, headers)

        response = _verify(client, headers, _wrong(last_code(container, EMAIL)))

        assert response.status_code == 400
        assert response.json()["type"].endswith("/errors/otp_invalid")
        assert "otp.failed" in audit_actions(container)

    def test_locks_after_max_attempts(
        self, client: TestClient, container: Container
    ) -> None:
        """Should refuse even the right code once five attempts have failed."""
        headers = csrf_headers(client)
        _send(client, headers)
        code = last_code(container, EMAIL)

        statuses = [
            _verify(client, headers, _wrong(code)).status_code for _ in range(5)
        ]
        locked = _verify(client, headers, code)

        assert statuses == [400] * 5
        assert locked.status_code == 429
        assert locked.json()["type"].endswith("/errors/otp_too_many_attempts")
        assert "user_session_token" not in client.cookies


@pytest.mark.api
class TestUserLogout:
    def test_logout_revokes_user_session(
        self, client: TestClient, container: Container
    ) -> None:
        headers = csrf_headers(client)
        _send(client, headers)
        _verify(client, headers, last_code(container, EMAIL))

        response = client.post(f"{API}/auth/logout", headers=headers)

        assert response.status_code == 200
        assert "user_session_token" not in client.cookies
        assert "user.logout" in audit_actions(container)

    def test_logout_without_session_is_ok(self, client: TestClient) -> None:
        response = client.post(f"{API}/auth/logout", headers=csrf_headers(client))

        assert response.status_code == 200
