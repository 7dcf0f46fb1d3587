"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data
        assert "environment" in data

    @pytest.mark.asyncio
    async def test_health_has_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert "x-request-id" in response.headers


class TestDetailedHealth:
    @pytest.mark.asyncio
    async def test_reports_database_and_places_mode(self, session_factory) -> None:
        from httpx import ASGITransport

        from infrastructure.database.session import get_async_session
        from main import create_app

        app = create_app()

        async def override_session():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_async_session] = override_session

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/health/detailed")

        data = response.json()
        assert response.status_code == 200
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["places"] == "fallback_only"
