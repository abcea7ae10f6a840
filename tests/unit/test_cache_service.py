"""CacheService tests against an in-memory Redis double with a manual clock."""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from app.domain.exceptions import CacheUnavailableException
from app.infrastructure.cache.redis_cache import CacheService
from tests.fakes import FakeRedis


@pytest.fixture
async def cache(settings, fake_redis: FakeRedis) -> CacheService:
    service = CacheService(settings, redis_client=fake_redis, clock=fake_redis.clock)
    await service.connect()
    return service


async def test_connect_marks_available(cache: CacheService) -> None:
    assert cache.is_available()
    assert await cache.ping()


async def test_connect_raises_when_redis_unreachable(settings, fake_redis: FakeRedis) -> None:
    fake_redis.error = redis.ConnectionError("refused")
    service = CacheService(settings, redis_client=fake_redis)
    with pytest.raises(CacheUnavailableException):
        await service.connect()
    assert not service.is_available()


async def test_set_then_get_round_trips_json(cache: CacheService) -> None:
    assert await cache.set("report:c1:orders:abc", {"total": 3, "items": [1, 2]})
    assert await cache.get("report:c1:orders:abc") == {"total": 3, "items": [1, 2]}


async def test_set_without_ttl_uses_default(cache: CacheService, fake_redis: FakeRedis) -> None:
    await cache.set("k", 1)
    assert fake_redis.store["k"][1] == cache.default_ttl


async def test_entry_expires_after_ttl(cache: CacheService, fake_redis: FakeRedis) -> None:
    await cache.set("k", "v", ttl=300)
    fake_redis.clock.advance(299)
    assert await cache.get("k") == "v"
    fake_redis.clock.advance(1)
    assert await cache.get("k") is None


async def test_get_or_compute_memoizes_within_ttl(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    compute = AsyncMock(side_effect=[{"n": 1}, {"n": 2}])

    assert await cache.get_or_compute("k", compute, ttl=300) == {"n": 1}
    fake_redis.clock.advance(100)
    assert await cache.get_or_compute("k", compute, ttl=300) == {"n": 1}
    assert compute.await_count == 1

    fake_redis.clock.advance(300)
    assert await cache.get_or_compute("k", compute, ttl=300) == {"n": 2}
    assert compute.await_count == 2


async def test_get_or_compute_does_not_cache_failures(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    compute = AsyncMock(side_effect=RuntimeError("upstream down"))
    with pytest.raises(RuntimeError):
        await cache.get_or_compute("k", compute)
    assert "k" not in fake_redis.store


async def test_runtime_errors_fail_open(cache: CacheService, fake_redis: FakeRedis) -> None:
    fake_redis.error = redis.ResponseError("WRONGTYPE")
    assert await cache.get("k") is None
    assert await cache.set("k", 1) is False
    assert await cache.delete("k") is False
    assert await cache.delete_pattern("report:*") == 0


async def test_get_or_compute_computes_when_redis_errors(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    fake_redis.error = redis.ResponseError("OOM")
    compute = AsyncMock(return_value={"n": 1})
    assert await cache.get_or_compute("k", compute) == {"n": 1}
    compute.assert_awaited_once()


async def test_dropped_connection_is_retried_once(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    await cache.set("k", "fresh")
    fake_redis.fail_next.append(redis.ConnectionError("reset by peer"))

    assert await cache.get("k") == "fresh"
    assert cache.is_available()


async def test_redis_outage_is_a_miss_until_retry_interval(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    fake_redis.error = redis.TimeoutError("timed out")

    assert await cache.get("k") is None
    assert not cache.is_available()
    assert await cache.set("k", 1) is False

    fake_redis.error = None
    fake_redis.clock.advance(cache.retry_interval - 1)
    assert await cache.set("k", 1) is False
    assert "k" not in fake_redis.store


async def test_cache_recovers_after_redis_returns(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    fake_redis.error = redis.ConnectionError("refused")
    assert await cache.get("k") is None
    assert not await cache.ping()

    fake_redis.error = None
    fake_redis.clock.advance(cache.retry_interval)

    assert await cache.set("k", 1)
    assert cache.is_available()
    assert await cache.get("k") == 1
    assert await cache.ping()


async def test_readiness_ping_reconnects_after_retry_interval(
    cache: CacheService, fake_redis: FakeRedis
) -> None:
    fake_redis.error = redis.ConnectionError("refused")
    assert not await cache.ping()

    fake_redis.error = None
    assert not await cache.ping()
    fake_redis.clock.advance(cache.retry_interval)
    assert await cache.ping()
    assert cache.is_available()


async def test_delete_pattern_keeps_its_client_when_disconnected_midway(
    cache: CacheService, fake_redis: FakeRedis, monkeypatch: pytest.MonkeyPatch
) -> None:
    await cache.set("report:c1:orders:a", 1)
    await cache.set("report:c1:dashboard:b", 2)
    scan = fake_redis.scan_iter

    async def scan_then_drop(match: str = "*"):
        async for key in scan(match=match):
            cache.redis = None
            yield key

    monkeypatch.setattr(fake_redis, "scan_iter", scan_then_drop)

    assert await cache.delete_pattern("report:c1:*") == 2
    assert fake_redis.store == {}


async def test_undecodable_entry_is_a_miss(cache: CacheService, fake_redis: FakeRedis) -> None:
    fake_redis.store["k"] = ("{not json", 1000.0)
    assert await cache.get("k") is None


async def test_delete_pattern_removes_only_matching_company(cache: CacheService) -> None:
    await cache.set("report:c1:orders:a", 1)
    await cache.set("report:c1:dashboard:b", 2)
    await cache.set("report:c2:orders:a", 3)

    assert await cache.delete_pattern("report:c1:*") == 2
    assert await cache.get("report:c1:orders:a") is None
    assert await cache.get("report:c2:orders:a") == 3


async def test_disconnect(cache: CacheService, fake_redis: FakeRedis) -> None:
    await cache.disconnect()
    assert fake_redis.closed
    assert not cache.is_available()
    assert await cache.get("k") is None
