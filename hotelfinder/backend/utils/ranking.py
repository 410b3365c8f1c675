"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..logging_config import logger


class PopularityRanker(Protocol):
    async def increment(self, term: str) -> bool: ...

    async def top(self, n: int) -> list[tuple[str, int]]: ...


class MemoryRanker:
    """Term scores held in a dict. Ties are ordered lexically by term."""

    def __init__(self) -> None:
        self._scores: dict[str, int] = {}
        self._lock = asyncio.Lock()
        self.connected = True

    async def increment(self, term: str) -> bool:
        if not self.connected:
            return False
        async with self._lock:
            self._scores[term] = self._scores.get(term, 0) + 1
        return True

    async def top(self, n: int) -> list[tuple[str, int]]:
        if not self.connected or n <= 0:
            return []
        async with self._lock:
            ranked = sorted(self._scores.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:n]


class RedisRanker:
    key = "popular:destinations"

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def increment(self, term: str) -> bool:
        try:
            await self._redis.zincrby(self.key, 1, term)
            return True
        except (RedisError, OSError) as exc:
            logger.warning("ranker.increment_failed", term=term, error=str(exc))
            return False

    async def top(self, n: int) -> list[tuple[str, int]]:
        if n <= 0:
            return []
        try:
            rows = await self._redis.zrevrange(self.key, 0, n - 1, withscores=True)
        except (RedisError, OSError) as exc:
            logger.warning("ranker.top_failed", error=str(exc))
            return []
        return [(_as_text(term), int(score)) for term, score in rows]


def _as_text(value: str | bytes) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value
