"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..logging_config import logger


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int


def _evaluate(count: int, limit: int) -> RateLimitResult:
    if count > limit:
        return RateLimitResult(allowed=False, remaining=0)
    return RateLimitResult(allowed=True, remaining=limit - count)


class RateLimiter(Protocol):
    async def check(self, client_id: str, limit: int, window_seconds: int) -> RateLimitResult: ...


@dataclass
class RateWindow:
    client_id: str
    count: int
    window_started_at: float


class FixedWindowRateLimiter:
    """Per-client fixed-window counter kept in process memory."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._windows: dict[str, RateWindow] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._last_sweep: float | None = None
        self.connected = True

    async def check(self, client_id: str, limit: int, window_seconds: int) -> RateLimitResult:
        if not self.connected:
            logger.warning("limiter.fail_open", client_id=client_id)
            return RateLimitResult(allowed=True, remaining=limit)
        async with self._lock:
            now = self._clock()
            self._sweep(now, window_seconds)
            window = self._windows.get(client_id)
            if window is None or now - window.window_started_at >= window_seconds:
                window = RateWindow(client_id=client_id, count=0, window_started_at=now)
                self._windows[client_id] = window
            window.count += 1
            return _evaluate(window.count, limit)

    def _sweep(self, now: float, window_seconds: int) -> None:
        # at most one full pass per window length
        if self._last_sweep is not None and now - self._last_sweep < window_seconds:
            return
        self._last_sweep = now
        expired = [key for key, window in self._windows.items() if now - window.window_started_at >= window_seconds]
        for key in expired:
            self._windows.pop(key, None)

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    def window_for(self, client_id: str) -> RateWindow | None:
        return self._windows.get(client_id)


class RedisRateLimiter:
    """Fixed-window limiter using one expiring counter key per client."""

    prefix = "rate_limit:"

    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def check(self, client_id: str, limit: int, window_seconds: int) -> RateLimitResult:
        key = f"{self.prefix}{client_id}"
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.set(key, 0, ex=window_seconds, nx=True)
                pipe.incr(key)
                _, count = await pipe.execute()
        except (RedisError, OSError) as exc:
            logger.warning("limiter.fail_open", client_id=client_id, error=str(exc))
            return RateLimitResult(allowed=True, remaining=limit)
        return _evaluate(int(count), limit)
