"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest
from collections.abc import AsyncGenerator
from httpx import ASGITransport, AsyncClient

from bagrut_portal.api.deps import get_files, get_store
from bagrut_portal.db.session import build_engine, build_session_factory, init_db
from bagrut_portal.main import app
from bagrut_portal.storage import FileBlobStore, LocalStore
from bagrut_portal.storage.seed import seed_collections


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite://")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def make_store(engine):
    """Factory for stores over the test database, with an optional quota."""

    def _make(quota_chars: int | None = None) -> LocalStore:
        return LocalStore(build_session_factory(engine), quota_chars=quota_chars)

    return _make


@pytest.fixture
def store(make_store) -> LocalStore:
    """Empty, unlimited store."""
    return make_store()


@pytest.fixture
async def seeded_store(store) -> LocalStore:
    """Store holding the first-run fixture data."""
    await seed_collections(store)
    return store


@pytest.fixture
async def client(seeded_store) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against the seeded store."""
    files = FileBlobStore(seeded_store)
    app.dependency_overrides[get_store] = lambda: seeded_store
    app.dependency_overrides[get_files] = lambda: files
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _bearer(client: AsyncClient, email: str, password: str = "password123") -> dict[str, str]:
    response = await client.post("/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    # Tests authenticate with explicit headers; drop the session cookie
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client) -> dict[str, str]:
    return await _bearer(client, "admin@example.com")


@pytest.fixture
async def user_headers(client) -> dict[str, str]:
    return await _bearer(client, "user@example.com")
