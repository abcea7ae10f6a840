"""Redis-based cache service for report memoization.

Provides async Redis caching with TTL support. Reports are cached per
company under keys built by app.infrastructure.cache.keys (DRY). The
service is created in the app lifespan and injected through a dependency,
never held in a module global.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.domain.exceptions import CacheUnavailableException

T = TypeVar("T")

logger = logging.getLogger(__name__)

_CONNECTION_ERRORS = (redis.ConnectionError, redis.TimeoutError, OSError)


class CacheService:
    """Async Redis cache service with TTL support.

    connect() is strict: an unreachable Redis raises
    CacheUnavailableException so startup fails loudly. After that, every
    operation is fail-open: Redis errors are logged and treated as a miss
    (get) or a no-op (set/delete). A connection or timeout error is
    re-checked once with PING; if Redis is still down the service reports
    unavailable and tries again at most once per redis_retry_interval.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        redis_client: redis.Redis | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache service.

        Args:
            settings: Connection settings; defaults to get_settings().
            redis_client: Optional Redis client for testing or DI.
            clock: Monotonic seconds, used for the retry backoff.
        """
        self.settings = settings or get_settings()
        self.redis = redis_client
        self.default_ttl = self.settings.cache_default_ttl
        self.retry_interval = self.settings.redis_retry_interval
        self._clock = clock
        self._connected = False
        self._retry_at = 0.0

    def _build_client(self) -> redis.Redis:
        password = self.settings.redis_password
        return redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            ssl=self.settings.redis_ssl,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_timeout,
            socket_timeout=self.settings.redis_socket_timeout,
            socket_keepalive=True,
        )

    async def connect(self) -> None:
        """Establish and verify the Redis connection. Call on app startup.

        Raises:
            CacheUnavailableException: If Redis does not answer PING.
        """
        if self.redis is None:
            self.redis = self._build_client()
        try:
            await self.redis.ping()
        except (redis.RedisError, OSError) as e:
            logger.error(
                "Redis connection failed (%s:%s): %s",
                self.settings.redis_host,
                self.settings.redis_port,
                e,
            )
            self._mark_down()
            raise CacheUnavailableException(
                self.settings.redis_host, self.settings.redis_port
            ) from e
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        client, self.redis = self.redis, None
        self._connected = False
        if client is not None:
            await client.aclose()
            logger.info("Redis cache disconnected")

    def _mark_down(self) -> None:
        self._connected = False
        self._retry_at = self._clock() + self.retry_interval

    async def _reconnect(self, client: redis.Redis) -> bool:
        """PING the client after a connection error; its pool opens fresh connections."""
        try:
            await client.ping()
        except (redis.RedisError, OSError):
            if self._connected:
                logger.warning("Redis unreachable, retrying in %ss", self.retry_interval)
            self._mark_down()
            return False
        if not self._connected:
            logger.info("Redis cache reconnected")
        self._connected = True
        return True

    async def _client(self) -> redis.Redis | None:
        """Return a usable client, or None after disconnect() and while Redis is down.

        Once the retry interval has passed, a lost connection is re-checked here.
        """
        client = self.redis
        if client is None:
            return None
        if self._connected:
            return client
        if self._clock() < self._retry_at:
            return None
        return client if await self._reconnect(client) else None

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def ping(self) -> bool:
        """Return True if Redis answers PING (readiness probe)."""
        client = await self._client()
        if client is None:
            return False
        try:
            return bool(await client.ping())
        except (redis.RedisError, OSError):
            logger.warning("Redis ping failed")
            self._mark_down()
            return False

    async def _run(
        self,
        action: str,
        target: str,
        command: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run command on one client; any Redis failure returns default."""
        client = await self._client()
        if client is None:
            return default
        try:
            return await command(client)
        except _CONNECTION_ERRORS:
            if not await self._reconnect(client):
                logger.warning("Cache %s unavailable for %s (Redis disconnected)", action, target)
                return default
            try:
                return await command(client)
            except (redis.RedisError, OSError):
                logger.exception("Cache %s error for %s after reconnect", action, target)
                return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", action, target)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        value = await self._run("get", key, lambda client: client.get(key), None)
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds; None applies the default TTL.

        Returns:
            True if stored, False otherwise.
        """
        ttl = self.default_ttl if ttl is None else ttl
        serialized = json.dumps(value, default=str)

        async def setex(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            return True

        stored = await self._run("set", key, setex, False)
        if stored:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return stored

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the call reached Redis."""

        async def delete(client: redis.Redis) -> bool:
            await client.delete(key)
            return True

        deleted = await self._run("delete", key, delete, False)
        if deleted:
            logger.debug("Cache DELETE: %s", key)
        return deleted

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Args:
            pattern: Redis SCAN match pattern (e.g. report:company-123:*).

        Returns:
            Number of keys deleted.
        """
        chunk_size = 500

        async def unlink_matching(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += int(await client.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await client.unlink(*chunk) or 0)
            return deleted

        deleted = await self._run("delete_pattern", pattern, unlink_matching, 0)
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
    ) -> Any:
        """Read-through memoization: return the cached value or compute and store it.

        Errors raised by compute propagate and nothing is cached.
        """
        cached_value = await self.get(key)
        if cached_value is not None:
            return cached_value
        result = await compute()
        await self.set(key, result, ttl=ttl)
        return result
