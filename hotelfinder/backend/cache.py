"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .logging_config import logger

Clock = Callable[[], float]


class CacheStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl: int) -> bool: ...

    async def healthy(self) -> bool: ...


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: str
    expires_at: float


class MemoryCache:
    """In-process TTL store. Expired entries are dropped lazily on read and swept on write."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._store: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self.connected = True

    async def get(self, key: str) -> str | None:
        if not self.connected:
            return None
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                self._store.pop(key, None)
                return None
            return entry.value

    async def set(self, key: str, value: str, ttl: int) -> bool:
        if not self.connected:
            return False
        async with self._lock:
            now = self._clock()
            expired = [name for name, entry in self._store.items() if entry.expires_at <= now]
            for name in expired:
                self._store.pop(name, None)
            self._store[key] = CacheEntry(key=key, value=value, expires_at=now + ttl)
        return True

    async def healthy(self) -> bool:
        return self.connected


class RedisCache:
    prefix = "search:"

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(f"{self.prefix}{key}")
        except (RedisError, OSError) as exc:
            logger.warning("cache.get_failed", key=key, error=str(exc))
            return None

    async def set(self, key: str, value: str, ttl: int) -> bool:
        try:
            await self._redis.set(f"{self.prefix}{key}", value, ex=ttl)
            return True
        except (RedisError, OSError) as exc:
            logger.warning("cache.set_failed", key=key, error=str(exc))
            return False

    async def healthy(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except (RedisError, OSError):
            return False
