"""Tests for health, info, frontend and error rendering."""

import pytest
from httpx import AsyncClient

from notehub.core.database import MemoryStore
from notehub.modules.notes.models import Note, utcnow


pytestmark = pytest.mark.integration


class TestHealth:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_ready(self, client: AsyncClient):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"store": "ok"}}

    async def test_ready_reports_broken_store(self, client: AsyncClient, store: MemoryStore):
        now = utcnow()
        store.notes["orphan"] = Note(
            id="orphan",
            title="t",
            content="c",
            tenant_id="gone",
            user_id="u",
            created_at=now,
            updated_at=now,
        )

        response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    async def test_health_is_not_rate_limited(self, client: AsyncClient):
        response = await client.get("/health")

        assert "X-RateLimit-Limit" not in response.headers

    async def test_info(self, client: AsyncClient):
        response = await client.get("/info")

        assert response.status_code == 200
        assert response.json()["app"] == "notehub"


class TestFrontend:
    async def test_index_page(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "notehub" in response.text


class TestCrossCutting:
    async def test_unknown_endpoint(self, client: AsyncClient):
        response = await client.get("/nope")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "endpoint_not_found"
        assert data["detail"] == "Endpoint not found"
        assert data["status"] == 404
        assert data["instance"] == "/nope"

    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/info", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    async def test_request_id_is_generated(self, client: AsyncClient):
        response = await client.get("/info")

        assert response.headers["X-Request-ID"]

    @pytest.mark.parametrize("bad_id", ["x" * 200, "two words", "{\"json\": 1}"])
    async def test_malformed_request_id_is_replaced(self, client: AsyncClient, bad_id: str):
        response = await client.get("/notes", headers={"X-Request-ID": bad_id})

        trace_id = response.headers["X-Request-ID"]
        assert trace_id != bad_id
        assert response.json()["traceId"] == trace_id

    async def test_problem_carries_trace_id(self, client: AsyncClient):
        response = await client.get("/notes", headers={"X-Request-ID": "trace-me"})

        assert response.json()["traceId"] == "trace-me"

    async def test_rate_limit_headers(self, client: AsyncClient):
        response = await client.get("/info")

        assert response.headers["X-RateLimit-Limit"] == "100"
        assert response.headers["X-RateLimit-Remaining"] == "99"

    async def test_cors_preflight(self, client: AsyncClient):
        response = await client.options(
            "/notes",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]
