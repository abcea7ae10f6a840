"""Liveness and readiness probes."""

import redis.asyncio as redis
from httpx import AsyncClient

from app.api.v1.dependencies import get_cache
from app.infrastructure.cache.redis_cache import CacheService
from app.main import app
from tests.fakes import FakeRedis


async def test_liveness(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_readiness_without_cache(client: AsyncClient) -> None:
    app.dependency_overrides[get_cache] = lambda: None
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["cache"] == "disabled"


async def test_readiness_with_reachable_cache(client: AsyncClient, settings) -> None:
    cache = CacheService(settings, redis_client=FakeRedis())
    await cache.connect()
    app.dependency_overrides[get_cache] = lambda: cache

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json()["cache"] == "ok"


async def test_readiness_with_unreachable_cache(client: AsyncClient, settings) -> None:
    fake = FakeRedis()
    cache = CacheService(settings, redis_client=fake)
    await cache.connect()
    fake.error = redis.ConnectionError("gone")
    app.dependency_overrides[get_cache] = lambda: cache

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
