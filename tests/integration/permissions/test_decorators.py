"""Integration tests for the require_action decorator on routes."""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import APIRouter, FastAPI
from httpx import ASGITransport, AsyncClient

from notehub.core.auth.dependencies import Claim
from notehub.core.errors import MissingTokenError
from notehub.core.permissions import Action, require_action


pytestmark = pytest.mark.integration


# Create a test router with protected endpoints
test_router = APIRouter()


@test_router.post("/admin-only")
@require_action(Action.TENANT_UPGRADE)
async def admin_only(claim: Claim):
    """Endpoint limited to admins."""
    return {"status": "ok", "user_id": claim.user_id}


@test_router.get("/any-role")
@require_action(Action.NOTE_LIST)
async def any_role(claim: Claim):
    """Endpoint open to every role."""
    return {"status": "ok", "role": str(claim.role)}


class TestRequireAction:
    """Tests for require_action on routes."""

    @pytest.fixture
    async def test_client(self, app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
        app.include_router(test_router, prefix="/test")
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client

    async def test_admin_allowed(
        self, test_client: AsyncClient, auth_headers: Callable[[str], dict[str, str]]
    ):
        response = await test_client.post(
            "/test/admin-only", headers=auth_headers("admin@globex.test")
        )

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_member_denied(
        self, test_client: AsyncClient, auth_headers: Callable[[str], dict[str, str]]
    ):
        response = await test_client.post(
            "/test/admin-only", headers=auth_headers("user@globex.test")
        )

        assert response.status_code == 403
        data = response.json()
        assert data["code"] == "insufficient_role"
        assert data["required_roles"] == ["admin"]

    async def test_member_allowed_for_open_action(
        self, test_client: AsyncClient, auth_headers: Callable[[str], dict[str, str]]
    ):
        response = await test_client.get(
            "/test/any-role", headers=auth_headers("user@globex.test")
        )

        assert response.status_code == 200
        assert response.json()["role"] == "member"

    async def test_unauthenticated(self, test_client: AsyncClient):
        response = await test_client.post("/test/admin-only")

        assert response.status_code == 401

    async def test_decorator_without_claim(self):
        """Calling a protected function with no claim is refused."""

        @require_action(Action.NOTE_LIST)
        async def handler(claim=None):
            return "reached"

        with pytest.raises(MissingTokenError):
            await handler()
