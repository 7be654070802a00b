"""Tests for health endpoint."""

import time

import pytest
from fastapi.testclient import TestClient

from soltools.ui.controller import AppController


@pytest.fixture
def controller(runtime, fake_helius) -> AppController:
    """Controller over the fake provider and the test runtime."""
    return AppController(client=fake_helius, runtime=runtime)


@pytest.fixture
def client(controller) -> TestClient:
    """Create test client for the FastAPI app."""
    from soltools.main import create_app

    return TestClient(create_app(controller))


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.unit
    def test_health_endpoint_returns_ok(self, client: TestClient) -> None:
        """
        Given: The application is running
        When: GET /api/health is called
        Then: Returns 200 with status, version and fetch info
        """
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert data["fetch"] == {"running": False, "transactions": 0, "last_outcome": None}

    @pytest.mark.unit
    def test_health_reports_last_fetch(self, client: TestClient, controller) -> None:
        """
        Given: A fetch has finished and the UI has drained it
        When: GET /api/health is called
        Then: Fetch info shows the stored count and the outcome
        """
        controller.start_fetch("key", "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin")
        controller.worker.wait(timeout=5.0)
        deadline = time.monotonic() + 5.0
        while controller.worker.get_status()["current_state"] != "idle" and time.monotonic() < deadline:
            time.sleep(0.01)
        controller.poll()

        data = client.get("/api/health").json()

        assert data["fetch"]["transactions"] == 250
        assert data["fetch"]["last_outcome"] == "completed"

    @pytest.mark.unit
    def test_health_degraded_when_runtime_stopped(self, client: TestClient, runtime) -> None:
        runtime.stop()

        data = client.get("/api/health").json()

        assert data["status"] == "degraded"

    @pytest.mark.unit
    def test_root_redirects_to_dashboard(self, client: TestClient) -> None:
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/dashboard"
