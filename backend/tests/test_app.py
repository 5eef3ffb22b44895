"""
Application Wiring Tests
========================

What:  Health endpoint, request IDs and the shared error body.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from noteful.main import create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/tags")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_is_echoed_in_header_and_error_body(self, test_client):
        response = await test_client.get("/api/notes/1", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


class TestErrorShape:

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_body(self, test_client):
        response = await test_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert "request_id" in response.json()

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/tags", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestUnexpectedError:

    @pytest.mark.asyncio
    async def test_500_body_carries_request_id(self, fresh_database):
        app = create_app()

        @app.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-500"
        assert response.headers["X-Request-ID"] == "trace-500"
