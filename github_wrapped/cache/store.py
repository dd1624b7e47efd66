"""
Key-value stores with expiry for cached bundles.
"""

import time
from typing import Callable, Optional, Protocol

import redis.asyncio as redis

from github_wrapped.core.exceptions import CacheError
from github_wrapped.core.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]:
        ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        ...


class InMemoryStore:
    """
    Process-local store. Expired entries are never returned and are dropped
    on read.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        # Whole-entry replacement
        self._entries[key] = (value, self.clock() + ttl_seconds)

    def __len__(self) -> int:
        return len(self._entries)


class RedisStore:
    """Redis-backed store using SETEX, so Redis enforces the expiry."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.client.get(key)
        except redis.RedisError as e:
            raise CacheError(f"Cache read failed: {e}", details={"key": key}) from e

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.client.setex(key, ttl_seconds, value)
        except redis.RedisError as e:
            raise CacheError(f"Cache write failed: {e}", details={"key": key}) from e

    async def aclose(self) -> None:
        await self.client.aclose()
