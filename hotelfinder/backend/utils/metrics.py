"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..logging_config import logger

CACHE_HITS = "cache_hits"
CACHE_MISSES = "cache_misses"
TOTAL_REQUESTS = "total_requests"
BOOKINGS_CREATED = "bookings_created"
BOOKING_CONFIRMATIONS_SENT = "booking_confirmations_sent"
INDEX_REBUILDS = "index_rebuilds"


class MetricsCounters(Protocol):
    async def increment(self, name: str) -> None: ...

    async def get(self, name: str) -> int: ...

    async def snapshot(self) -> dict[str, int]: ...


class MemoryCounters:
    def __init__(self) -> None:
        self._values: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def increment(self, name: str) -> None:
        async with self._lock:
            self._values[name] = self._values.get(name, 0) + 1

    async def get(self, name: str) -> int:
        return self._values.get(name, 0)

    async def snapshot(self) -> dict[str, int]:
        async with self._lock:
            return dict(self._values)


class RedisCounters:
    prefix = "metrics:"

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def increment(self, name: str) -> None:
        try:
            await self._redis.incr(f"{self.prefix}{name}")
        except (RedisError, OSError) as exc:
            logger.warning("metrics.increment_failed", counter=name, error=str(exc))

    async def get(self, name: str) -> int:
        try:
            value = await self._redis.get(f"{self.prefix}{name}")
        except (RedisError, OSError) as exc:
            logger.warning("metrics.get_failed", counter=name, error=str(exc))
            return 0
        return _to_int(value)

    async def snapshot(self) -> dict[str, int]:
        metrics: dict[str, int] = {}
        try:
            async for key in self._redis.scan_iter(match=f"{self.prefix}*"):
                name = key.decode("utf-8") if isinstance(key, bytes) else key
                metrics[name[len(self.prefix):]] = _to_int(await self._redis.get(name))
        except (RedisError, OSError) as exc:
            logger.warning("metrics.snapshot_failed", error=str(exc))
            return {}
        return metrics


def _to_int(value: str | bytes | None) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


def compute_hit_rate(hits: int, misses: int) -> float:
    total = hits + misses
    if total == 0:
        return 0.0
    return round(100 * hits / total, 2)
