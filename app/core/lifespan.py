"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, shared
HTTP client, cache, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.persistence.database import dispose_engine
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client, Redis cache (if enabled).
    An unreachable Redis aborts startup with CacheUnavailableException.
    Shutdown order: cache disconnect, HTTP client close, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for store API calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.store_api_timeout_seconds,
        headers={"User-Agent": settings.store_api_user_agent},
    )

    if settings.redis_enabled:
        cache = CacheService(settings)
        try:
            await cache.connect()
        except Exception:
            await app.state.http_client.aclose()
            raise
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled; reports are computed on every request")

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")

    await dispose_engine()
