"""Pytest configuration and shared fixtures.

Every test gets its own application with a freshly seeded store and
rate limiter, so no state leaks between tests.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from notehub.core.auth.backend import create_access_token
from notehub.core.database import MemoryStore
from notehub.core.database.seed import seed_demo_data
from notehub.main import create_app
from notehub.modules.notes.repos import NoteRepository
from notehub.modules.tenants.models import Tenant
from notehub.modules.users.models import User


PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def store() -> MemoryStore:
    """A store holding the demo tenants and users."""
    store = MemoryStore()
    seed_demo_data(store)
    return store


@pytest.fixture
def app(store: MemoryStore) -> FastAPI:
    """Application bound to the test store.

    httpx does not run the lifespan, so the store is seeded up front.
    """
    app = create_app(store=store)
    app.state.static_dir = PROJECT_ROOT / "public"
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def note_repo(store: MemoryStore) -> NoteRepository:
    return NoteRepository(store)


def _tenant(store: MemoryStore, slug: str) -> Tenant:
    return next(t for t in store.tenants.values() if t.slug == slug)


def _user(store: MemoryStore, email: str) -> User:
    return next(u for u in store.users.values() if u.email == email)


@pytest.fixture
def acme(store: MemoryStore) -> Tenant:
    return _tenant(store, "acme")


@pytest.fixture
def globex(store: MemoryStore) -> Tenant:
    return _tenant(store, "globex")


@pytest.fixture
def get_user(store: MemoryStore) -> Callable[[str], User]:
    """Look up a seeded user by email."""
    return lambda email: _user(store, email)


@pytest.fixture
def auth_headers(get_user: Callable[[str], User]) -> Callable[[str], dict[str, str]]:
    """Build bearer headers for a seeded user without going through login."""

    def _headers(email: str) -> dict[str, str]:
        token = create_access_token(get_user(email))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def login(client: AsyncClient) -> Callable[[str, str], Awaitable[str]]:
    """Log in through the API and return the bearer token."""

    async def _login(email: str, password: str = "password") -> str:
        response = await client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login
