"""Integration tests for health, error and header behaviour."""

import pytest

from mindify.api.dependencies import get_mongodb
from mindify.api.main import app


class TestHealthEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "Mindify"
        assert data["environment"] == "test"

    @pytest.mark.asyncio
    async def test_ready(self, client, mock_mongodb):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        mock_mongodb.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_ready_when_ping_fails(self, client, mock_mongodb):
        mock_mongodb.ping.return_value = False

        response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    @pytest.mark.asyncio
    async def test_not_ready_without_database(self, client):
        app.dependency_overrides[get_mongodb] = lambda: None

        response = await client.get("/health/ready")

        assert response.status_code == 503


class TestCommonBehaviour:
    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers

    @pytest.mark.asyncio
    async def test_request_id_propagated(self, client):
        request_id = "0f8fad5b-d9cb-469f-a165-70867728950e"

        response = await client.get("/posts/unknown", headers={"X-Request-ID": request_id})

        assert response.headers["X-Request-ID"] == request_id
        assert response.json()["request_id"] == request_id

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    @pytest.mark.asyncio
    async def test_metrics_disabled_in_test_mode(self, client):
        response = await client.get("/metrics")

        assert response.status_code == 404
