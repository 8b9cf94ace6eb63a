"""
Unit tests for health check endpoint.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from trustless_agent.main import app


class TestHealthCheck:
    """Test health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check_returns_ok(self):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    @pytest.mark.asyncio
    async def test_unknown_route_renders_error_field(self):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
