"""Startup and shutdown wiring: shared HTTP client and fatal cache connect."""

import pytest
from fastapi import FastAPI

from app.core import lifespan as lifespan_module
from app.domain.exceptions import CacheUnavailableException


class UnreachableCache:
    def __init__(self, settings) -> None:
        self.settings = settings

    async def connect(self) -> None:
        raise CacheUnavailableException(self.settings.redis_host, self.settings.redis_port)


class HealthyCache(UnreachableCache):
    disconnected = False

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        HealthyCache.disconnected = True


def _use_settings(monkeypatch, settings, **changes) -> None:
    patched = settings.model_copy(update=changes)
    monkeypatch.setattr(lifespan_module, "get_settings", lambda: patched)


async def test_startup_without_redis(monkeypatch, settings) -> None:
    _use_settings(monkeypatch, settings, redis_enabled=False)
    app = FastAPI()

    async with lifespan_module.create_lifespan(app):
        assert app.state.cache is None
        client = app.state.http_client
        assert not client.is_closed

    assert client.is_closed
    assert app.state.http_client is None


async def test_unreachable_redis_aborts_startup(monkeypatch, settings) -> None:
    _use_settings(monkeypatch, settings, redis_enabled=True)
    monkeypatch.setattr(lifespan_module, "CacheService", UnreachableCache)
    app = FastAPI()

    with pytest.raises(CacheUnavailableException):
        async with lifespan_module.create_lifespan(app):
            pytest.fail("startup should not complete")

    assert app.state.http_client.is_closed


async def test_cache_is_attached_and_disconnected(monkeypatch, settings) -> None:
    _use_settings(monkeypatch, settings, redis_enabled=True)
    monkeypatch.setattr(lifespan_module, "CacheService", HealthyCache)
    app = FastAPI()

    async with lifespan_module.create_lifespan(app):
        assert isinstance(app.state.cache, HealthyCache)

    assert HealthyCache.disconnected
    assert app.state.cache is None
