"""Pytest configuration and fixtures for storepulse.

Required secrets are set before app.* is imported so Settings validates.
Redis is disabled for the app under test; cache tests use FakeRedis.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdef0123456789abcdef")
os.environ.setdefault("ENCRYPTION_SALT", "test-encryption-salt")
os.environ["REDIS_ENABLED"] = "false"

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings, get_settings

get_settings.cache_clear()

from app.core.limiter import limiter
from app.main import app
from tests.fakes import FakeRedis

limiter.enabled = False


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI). Clears dependency overrides after."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
