"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest
from httpx import AsyncClient

from app.services.health_service import HealthService


@pytest.mark.asyncio
async def test_health_endpoint(test_client: AsyncClient):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()

    assert "status" in data
    assert data["version"] == "0.1.0"
    assert data["uptime"].startswith("PT")
    assert data["checks"] == {"database": "ok"}
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_root_health_endpoint(test_client: AsyncClient):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_health_without_session_skips_database():
    health = await HealthService().get_health()

    assert health.status == "ok"
    assert health.checks == {"database": "skipped"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(test_client: AsyncClient):
    response = await test_client.get("/api/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not Found"
    assert body["path"] == "/api/does-not-exist"
