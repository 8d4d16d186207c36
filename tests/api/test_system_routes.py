"""API tests for system routes and cross-cutting middleware."""

import pytest


@pytest.mark.api
class TestSystemRoutes:
    """Test /, /health and /config."""

    def test_root(self, client):
        """Test the root endpoint reports the app name."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"
        assert response.json()["message"] == "Shutterfeed API"

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "storage": "local",
            "connections": 0,
        }

    def test_config_hidden_outside_development(self, client):
        """Test /config is refused in the testing environment."""
        response = client.get("/config")

        assert response.status_code == 403


@pytest.mark.api
class TestTraceMiddleware:
    """Test request correlation."""

    def test_trace_id_generated(self, client):
        """Test every response carries a trace id."""
        response = client.get("/health")

        assert response.headers["X-Trace-Id"]

    def test_trace_id_propagated(self, client):
        """Test an incoming trace id is echoed back."""
        response = client.get("/health", headers={"X-Trace-Id": "trace-abc"})

        assert response.headers["X-Trace-Id"] == "trace-abc"


@pytest.mark.api
class TestErrorFormat:
    """Test RFC 9457 responses for framework errors."""

    def test_unknown_route_is_problem_details(self, client):
        """Test routing 404s use Problem Details."""
        response = client.get("/api/v1/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["instance"] == "/api/v1/nowhere"
