"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from redis.asyncio import Redis

from .cache import CacheStore, MemoryCache, RedisCache
from .config import Settings, get_settings
from .database import Database
from .logging_config import logger
from .services.bookings import BookingService
from .services.dashboard import DashboardService
from .services.hotel_store import SqlBookingStore, SqlHotelProvider, SqlSearchLog
from .services.search_service import SearchService
from .utils.background import BackgroundRunner
from .utils.metrics import TOTAL_REQUESTS, MemoryCounters, MetricsCounters, RedisCounters
from .utils.ranking import MemoryRanker, PopularityRanker, RedisRanker
from .utils.rate_limiter import FixedWindowRateLimiter, RateLimiter, RedisRateLimiter


@dataclass
class Services:
    cache: CacheStore
    ranker: PopularityRanker
    limiter: RateLimiter
    counters: MetricsCounters
    background: BackgroundRunner
    search: SearchService
    dashboard: DashboardService
    bookings: BookingService
    database: Optional[Database] = None
    redis: Optional[Redis] = None
    shutdown_grace_seconds: float = 5.0

    async def startup(self) -> None:
        if self.database is not None:
            await self.database.init()

    async def database_connected(self) -> Optional[bool]:
        if self.database is None:
            return None
        return await self.database.ping()

    async def shutdown(self) -> None:
        await self.background.shutdown(self.shutdown_grace_seconds)
        if self.redis is not None:
            await self.redis.aclose()
        if self.database is not None:
            await self.database.dispose()


def build_services(settings: Settings) -> Services:
    database = Database(settings.database_url)
    redis: Optional[Redis] = None
    if settings.cache_backend == "redis":
        redis = Redis.from_url(str(settings.redis_url), encoding="utf-8", decode_responses=True)
        cache: CacheStore = RedisCache(redis)
        ranker: PopularityRanker = RedisRanker(redis)
        limiter: RateLimiter = RedisRateLimiter(redis)
        counters: MetricsCounters = RedisCounters(redis)
    else:
        cache = MemoryCache()
        ranker = MemoryRanker()
        limiter = FixedWindowRateLimiter()
        counters = MemoryCounters()
    logger.info("services.build", cache_backend=settings.cache_backend)

    background = BackgroundRunner()
    search_log = SqlSearchLog(database)
    search = SearchService(
        SqlHotelProvider(database),
        cache,
        ranker,
        limiter,
        counters,
        search_log,
        background,
        rate_limit=settings.rate_limit_requests,
        rate_window_seconds=settings.rate_limit_window_seconds,
        cache_ttl_seconds=settings.search_cache_ttl_seconds,
        backend_timeout_seconds=settings.backend_timeout_seconds,
    )
    dashboard = DashboardService(cache, ranker, counters, search_log, popular_limit=settings.popular_destinations_limit)
    bookings = BookingService(
        SqlBookingStore(database),
        counters,
        background,
        confirmation_delay_seconds=settings.booking_confirmation_delay_seconds,
        reindex_delay_seconds=settings.reindex_delay_seconds,
    )
    return Services(
        cache=cache,
        ranker=ranker,
        limiter=limiter,
        counters=counters,
        background=background,
        search=search,
        dashboard=dashboard,
        bookings=bookings,
        database=database,
        redis=redis,
        shutdown_grace_seconds=settings.shutdown_grace_seconds,
    )


_services: Optional[Services] = None


def get_services() -> Services:
    global _services
    if _services is None:
        _services = build_services(get_settings())
    return _services


def set_services(services: Optional[Services]) -> None:
    global _services
    _services = services


async def count_request(services: Services = Depends(get_services)) -> None:
    await services.counters.increment(TOTAL_REQUESTS)


def client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"
