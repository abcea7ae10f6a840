"""Test doubles shared across test modules."""

import fnmatch
from collections.abc import AsyncIterator


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (the subset CacheService uses).

    Set ``error`` to an exception instance to make every command raise it, or
    append to ``fail_next`` to make only the next commands raise.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock or FakeClock()
        self.store: dict[str, tuple[str, float]] = {}
        self.error: Exception | None = None
        self.fail_next: list[Exception] = []
        self.closed = False

    def _check(self) -> None:
        if self.fail_next:
            raise self.fail_next.pop(0)
        if self.error is not None:
            raise self.error

    def _alive(self, key: str) -> bool:
        entry = self.store.get(key)
        if entry is None:
            return False
        if entry[1] <= self.clock.now:
            del self.store[key]
            return False
        return True

    async def ping(self) -> bool:
        self._check()
        return True

    async def get(self, key: str) -> str | None:
        self._check()
        return self.store[key][0] if self._alive(key) else None

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self._check()
        self.store[key] = (value, self.clock.now + ttl)
        return True

    async def delete(self, *keys: str) -> int:
        self._check()
        return sum(1 for k in keys if self.store.pop(k, None) is not None)

    async def unlink(self, *keys: str) -> int:
        return await self.delete(*keys)

    async def scan_iter(self, match: str = "*") -> AsyncIterator[str]:
        self._check()
        for key in list(self.store):
            if self._alive(key) and fnmatch.fnmatchcase(key, match):
                yield key

    async def aclose(self) -> None:
        self.closed = True


class ReversingCipher:
    """Deterministic stand-in for the Fernet credential cipher."""

    def encrypt(self, plaintext: str) -> str:
        return f"enc:{plaintext[::-1]}"

    def decrypt(self, ciphertext: str) -> str:
        return ciphertext.removeprefix("enc:")[::-1]
