"""
Tests for API layer.

Tests:
- SimulationService methods
- Response formatting for valid and invalid scripts
- HTTP endpoints through FastAPI's TestClient
"""

import pytest

from .. import __version__
from ..api.schemas import (
    ActionStatusName,
    ErrorCode,
    ErrorResponse,
    SimulateRequest,
    SimulateResponse,
)
from ..api.service import SimulationService
from ..session import SimulationLimits


class TestSimulationService:
    """Tests for SimulationService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return SimulationService()

    def test_health(self, service):
        response = service.health()
        assert response.status == "ok"
        assert response.service == "wizards"

    def test_simulate_valid_script(self, service, sample_script):
        """A valid script returns the report and final standings."""
        response = service.simulate(SimulateRequest(script=sample_script))

        assert response.success
        assert response.report == ["This player is frozen", "The chosen wizard is Harry"]
        assert response.verdict == "The chosen wizard is Harry"
        assert response.winner == "Harry"
        assert not response.is_tie
        assert response.actions_applied == 5
        assert response.statuses[3] == ActionStatusName.PLAYER_FROZEN
        assert [(t.wizard, t.power) for t in response.teams] == [("Harry", 800), ("Voldemort", 200)]
        assert response.players[-1].name == "S_0"
        assert response.error is None

    def test_simulate_invalid_script(self, service):
        """Structural errors are reported, not raised."""
        response = service.simulate(SimulateRequest(script="0\n"))

        assert not response.success
        assert response.report == ["Invalid inputs"]
        assert response.error_code == ErrorCode.INVALID_SCRIPT
        assert response.error
        assert response.players == []

    def test_request_max_actions(self, service, sample_script):
        """The request can lower the action limit."""
        response = service.simulate(SimulateRequest(script=sample_script, max_actions=4))
        assert not response.success

    def test_service_limits(self, sample_script):
        service = SimulationService(limits=SimulationLimits(max_players=3))
        response = service.simulate(SimulateRequest(script=sample_script))
        assert not response.success

    def test_response_serializes(self, service, sample_script):
        response = service.simulate(SimulateRequest(script=sample_script))
        data = response.model_dump(mode="json")

        assert data["statuses"][0] == "ok"
        assert data["api_version"] == "v1"


class TestHTTPEndpoints:
    """Tests for the FastAPI app."""

    @pytest.fixture
    def client(self):
        pytest.importorskip("httpx")
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        return TestClient(create_app())

    def test_health_endpoint(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_simulate_endpoint(self, client, sample_script):
        response = client.post("/api/v1/simulate", json={"script": sample_script})

        assert response.status_code == 200
        body = SimulateResponse.model_validate(response.json())
        assert body.winner == "Harry"

    def test_simulate_invalid_script_is_not_http_error(self, client):
        response = client.post("/api/v1/simulate", json={"script": "nonsense"})

        assert response.status_code == 200
        assert response.json()["report"] == ["Invalid inputs"]

    def test_missing_script_is_rejected(self, client):
        response = client.post("/api/v1/simulate", json={})

        assert response.status_code == 422
        body = ErrorResponse.model_validate(response.json())
        assert body.error_code == ErrorCode.VALIDATION_ERROR
        assert body.details["errors"]

    def test_negative_max_actions_is_rejected(self, client):
        response = client.post("/api/v1/simulate", json={"script": "1", "max_actions": -1})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_service_failure_is_internal_error(self):
        """Unexpected exceptions become a 500 ErrorResponse."""
        pytest.importorskip("httpx")
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        class FailingService(SimulationService):
            def simulate(self, request):
                raise RuntimeError("registry exploded")

        client = TestClient(create_app(service=FailingService()))
        response = client.post("/api/v1/simulate", json={"script": "1"})

        assert response.status_code == 500
        body = ErrorResponse.model_validate(response.json())
        assert body.error_code == ErrorCode.INTERNAL_ERROR
        assert "registry exploded" in body.error

    def test_versions_agree(self, client):
        """The OpenAPI version and the health version are the package version."""
        assert client.get("/api/v1/health").json()["version"] == __version__
        assert client.app.version == __version__
