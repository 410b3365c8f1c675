"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
import json
import time
from typing import Optional

from ..cache import CacheStore
from ..logging_config import logger
from ..models.schemas import Hotel, SearchEvent, SearchMetadata
from ..utils.background import BackgroundRunner
from ..utils.metrics import CACHE_HITS, CACHE_MISSES, MetricsCounters
from ..utils.ranking import PopularityRanker
from ..utils.rate_limiter import RateLimiter
from .errors import BackendUnavailable, InvalidQuery, ProviderUnavailable, RateLimitExceeded
from .hotel_store import HotelProvider, SearchEventSink

KEY_SEPARATOR = "|"


def normalize_city(city: str) -> str:
    return city.strip().lower()


def build_search_key(city: str, checkin: Optional[str], checkout: Optional[str], guests: int) -> str:
    """Identical logical queries map to the same key regardless of city casing."""
    return KEY_SEPARATOR.join([normalize_city(city), checkin or "", checkout or "", str(guests)])


def _encode(results: list[Hotel]) -> str:
    return json.dumps([hotel.model_dump() for hotel in results])


def _decode(payload: str) -> list[Hotel]:
    return [Hotel(**item) for item in json.loads(payload)]


class SearchService:
    """Cache-aside hotel search in front of a slower provider.

    Each call is charged to the caller's rate-limit window first, then served
    from the cache or the provider. Every search counts toward destination
    popularity, and a search event is handed to the sink in the background.
    """

    def __init__(
        self,
        provider: HotelProvider,
        cache: CacheStore,
        ranker: PopularityRanker,
        limiter: RateLimiter,
        counters: MetricsCounters,
        event_sink: SearchEventSink,
        background: BackgroundRunner,
        *,
        rate_limit: int = 100,
        rate_window_seconds: int = 3600,
        cache_ttl_seconds: int = 300,
        backend_timeout_seconds: Optional[float] = 5.0,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.ranker = ranker
        self.limiter = limiter
        self.counters = counters
        self.event_sink = event_sink
        self.background = background
        self.rate_limit = rate_limit
        self.rate_window_seconds = rate_window_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self.backend_timeout_seconds = backend_timeout_seconds

    async def search(
        self,
        city: Optional[str],
        checkin: Optional[str],
        checkout: Optional[str],
        guests: int,
        client_id: str,
    ) -> tuple[list[Hotel], SearchMetadata]:
        started = time.perf_counter()
        if not city or not city.strip():
            raise InvalidQuery("City parameter is required")
        city = city.strip()

        quota = await self.limiter.check(client_id, self.rate_limit, self.rate_window_seconds)
        if not quota.allowed:
            logger.warning("search.rate_limited", client_id=client_id)
            raise RateLimitExceeded(remaining=0)

        key = build_search_key(city, checkin, checkout, guests)
        results = await self._cached_results(key)
        from_cache = results is not None
        if results is not None:
            await self.counters.increment(CACHE_HITS)
            logger.info("search.cache_hit", key=key)
        else:
            results = await self._fetch(city)
            await self.cache.set(key, _encode(results), self.cache_ttl_seconds)
            await self.counters.increment(CACHE_MISSES)

        await self.ranker.increment(normalize_city(city))

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        event = SearchEvent(
            city=city,
            checkin=checkin,
            checkout=checkout,
            guests=guests,
            result_count=len(results),
            elapsed_ms=elapsed_ms,
            cache_hit=from_cache,
        )
        self._emit(event)

        metadata = SearchMetadata(
            city=city,
            checkin=checkin,
            checkout=checkout,
            guests=guests,
            total_results=len(results),
            response_time_ms=int((time.perf_counter() - started) * 1000),
            from_cache=from_cache,
            remaining_requests=quota.remaining,
        )
        return results, metadata

    async def _cached_results(self, key: str) -> Optional[list[Hotel]]:
        payload = await self.cache.get(key)
        if payload is None:
            return None
        try:
            return _decode(payload)
        except (ValueError, TypeError) as exc:
            logger.warning("search.cache_payload_invalid", key=key, error=str(exc))
            return None

    async def _fetch(self, city: str) -> list[Hotel]:
        try:
            return await asyncio.wait_for(self.provider.find_by_city(city), timeout=self.backend_timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.warning("search.backend_unavailable", city=city, reason="timeout")
            raise BackendUnavailable(f"Hotel search timed out for {city!r}") from exc
        except ProviderUnavailable as exc:
            logger.warning("search.backend_unavailable", city=city, reason=str(exc))
            raise BackendUnavailable(str(exc)) from exc

    def _emit(self, event: SearchEvent) -> None:
        logger.info("search.completed", **event.model_dump())
        self.background.spawn(self.event_sink.log_search(event), name="search-log")
