"""Tests for health endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


def test_root_health_check(client: TestClient):
    """Root health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_api_health_check(client: TestClient, api_prefix: str):
    """API health reports uptime and admission store status."""
    response = client.get(f"{api_prefix}/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "uptime_seconds" in data
    assert data["admission_store"]["details"] == {"enabled": False}
    assert data["topic_model_trained"] is False


def test_db_health_check(client: TestClient, api_prefix: str):
    """Database health check runs a query through the pool."""
    response = client.get(f"{api_prefix}/health/db")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["healthy"] is True
    assert data["database"]["latency_ms"] is not None


def test_db_health_failure(client: TestClient, api_prefix: str):
    """Pool errors mark the database unhealthy."""
    with patch(
        "smartsearch.infrastructure.storage.sqlite.get_pool",
        AsyncMock(side_effect=RuntimeError("disk I/O error")),
    ):
        response = client.get(f"{api_prefix}/health/db")

    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"]["error"] == "disk I/O error"


def test_health_exempt_from_admission(app_factory, api_prefix: str):
    """Health endpoints stay reachable for a client with no tokens left."""
    app = app_factory(ADMISSION_ENABLED="true", ADMISSION_CAPACITY="1", ADMISSION_REFILL_TOKENS="1")
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        for _ in range(3):
            assert client.get(f"{api_prefix}/health").status_code == 200

        data = client.get(f"{api_prefix}/health").json()
        assert data["admission_store"]["name"] == "memory"


def test_rate_limit_through_app(app_factory, api_prefix: str):
    """Search traffic beyond the bucket capacity gets 429."""
    app = app_factory(ADMISSION_ENABLED="true", ADMISSION_CAPACITY="2", ADMISSION_REFILL_TOKENS="2")
    with TestClient(app) as client:
        payload = {"query": "guide", "collection": "guides"}
        codes = [client.post(f"{api_prefix}/smart-search", json=payload).status_code for _ in range(3)]

    assert codes == [200, 200, 429]
