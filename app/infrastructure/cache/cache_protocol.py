"""Cache protocol for the service layer (DIP)."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis). Used by report and store services."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def ping(self) -> bool:
        """Return True if the backend answers (readiness probe)."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value; ttl None applies the default TTL."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove all keys matching a SCAN pattern; return how many."""
        ...

    async def get_or_compute(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
    ) -> Any:
        """Return the cached value, or compute, store, and return it."""
        ...
