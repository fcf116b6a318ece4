"""Tests for health check API endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from fastapi import status
from fastapi.testclient import TestClient

from stockdesk.services.openai.client import OpenAIClientManager
from stockdesk.services.openai.config import OpenAISettings


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_200(self, client: TestClient):
        """GET /health returns 200 OK."""
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK

    def test_health_returns_status_field(self, client: TestClient):
        """GET /health returns status field."""
        data = client.get("/health").json()
        assert data["status"] in ["healthy", "degraded", "unhealthy"]
        assert "version" in data

    def test_health_returns_checks(self, client: TestClient):
        """GET /health reports the simulation and assessment service."""
        data = client.get("/health").json()
        assert data["checks"]["simulation"] is True
        assert "assessment_service" in data["checks"]

    def test_degraded_without_assessment_service(self, client: TestClient):
        """A missing API key degrades but does not fail the service."""
        with patch("stockdesk.api.routes.health.assessment_service_check", return_value=False):
            data = client.get("/health").json()
        assert data["status"] == "degraded"

    def test_healthy_with_assessment_service(self, client: TestClient):
        with patch("stockdesk.api.routes.health.assessment_service_check", return_value=True):
            data = client.get("/health").json()
        assert data["status"] == "healthy"

    def test_healthy_once_circuit_timeout_elapses(self, client: TestClient):
        """A tripped circuit stops degrading health after its timeout."""
        manager = OpenAIClientManager(
            OpenAISettings(OPENAI_API_KEY="sk-test", OPENAI_CB_THRESHOLD=1, OPENAI_CB_TIMEOUT=60)
        )
        manager.record_failure()
        manager._circuit_breaker.opened_at = datetime.now(UTC) - timedelta(seconds=10000)

        with (
            patch("stockdesk.api.routes.health.get_openai_settings", return_value=manager.settings),
            patch("stockdesk.api.routes.health.get_client_manager", return_value=manager),
        ):
            data = client.get("/health").json()

        assert data["checks"]["assessment_service"] is True
        assert data["status"] == "healthy"

    def test_request_id_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestLivenessEndpoint:
    """Tests for GET /health/live."""

    def test_live_returns_alive_status(self, client: TestClient):
        """GET /health/live returns alive status."""
        response = client.get("/health/live")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "alive"
