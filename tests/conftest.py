"""Test fixtures — a fresh app and SQLite database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own Settings pointing at a throwaway SQLite file
   (aiosqlite driver), so nothing leaks between tests and no database
   server is needed.
2. create_app(settings) builds the real app — real access guard, real
   token service, real repositories. Tables come from Base.metadata.
3. httpx.AsyncClient talks to the app in-process via ASGITransport.

bcrypt runs at its minimum cost (4 rounds) to keep the suite fast.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from voyagehub.config import Settings
from voyagehub.db.models import Base
from voyagehub.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef-not-for-production"


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'voyagehub.db'}",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        environment="test",
    )


@pytest_asyncio.fixture()
async def app(settings):
    application = create_app(settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield application
    finally:
        await application.state.engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def make_user(client):
    """Factory: register + login a user, return ids and auth headers."""

    async def _make(username=None, password="secret123", email=None):
        username = username or f"user-{uuid.uuid4().hex[:8]}"
        email = email or f"{username}@example.com"
        r = await client.post(
            "/api/register",
            json={"username": username, "email": email, "password": password},
        )
        assert r.status_code == 201, r.text

        r = await client.post(
            "/api/login", json={"email": email, "password": password}
        )
        assert r.status_code == 200, r.text
        body = r.json()
        return {
            "id": body["user"]["id"],
            "username": username,
            "email": email,
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _make
