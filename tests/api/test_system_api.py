"""API tests for system routes, tracing and problem details."""

import pytest
from fastapi.testclient import TestClient

from tests.utils.auth_helpers import API


@pytest.mark.api
class TestSystemRoutes:
    def test_root(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Gatehouse",
            "status": "operational",
            "version": "0.1.0",
        }

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert "X-RateLimit-Limit" not in response.headers


@pytest.mark.api
class TestTracing:
    def test_trace_id_generated(self, client: TestClient) -> None:
        response = client.get("/health")

        assert len(response.headers["X-Trace-Id"]) == 36

    def test_trace_id_echoed_into_problem(self, client: TestClient) -> None:
        """Should carry the caller's trace id in headers and problem body."""
        response = client.get(
            f"{API}/admin/auth/me", headers={"X-Trace-Id": "trace-from-client"}
        )

        assert response.status_code == 401
        assert response.headers["X-Trace-Id"] == "trace-from-client"
        assert response.json()["trace_id"] == "trace-from-client"


@pytest.mark.api
class TestProblemDetails:
    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get(f"{API}/no-such-route")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        problem = response.json()
        assert problem["title"] == "Resource Not Found"
        assert problem["type"] == "http://localhost:8000/errors/not-found"

    def test_validation_errors_list_fields(self, client: TestClient) -> None:
        """Should name the failing field without the 'body' prefix."""
        token = client.get(f"{API}/csrf").json()["token"]

        response = client.post(
            f"{API}/auth/otp/send",
            json={"email": "not-an-email"},
            headers={"X-CSRF-Token": token},
        )

        assert response.status_code == 422
        problem = response.json()
        assert problem["type"].endswith("/errors/validation-failed")
        assert [e["field"] for e in problem["errors"]] == ["email"]
