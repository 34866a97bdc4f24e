"""Test health check endpoint."""

from fastapi.testclient import TestClient

from skillcascade.main import app

client = TestClient(app)


def test_health_check():
    """Test that /health returns 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_engine_routes_mounted_under_v1():
    """Test that engine routes are served under the /v1 prefix."""
    paths = {route.path for route in app.routes}
    assert "/v1/ceilings" in paths
    assert "/v1/start-here" in paths
    assert "/ceilings" not in paths
