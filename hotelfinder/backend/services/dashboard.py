"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import time

from ..cache import CacheStore
from ..models.schemas import CacheMetrics, MetricsHealth, MetricsResponse, PopularDestination
from ..utils.metrics import CACHE_HITS, CACHE_MISSES, MetricsCounters, compute_hit_rate
from ..utils.ranking import PopularityRanker
from .hotel_store import SearchEventSink


class DashboardService:
    def __init__(
        self,
        cache: CacheStore,
        ranker: PopularityRanker,
        counters: MetricsCounters,
        search_log: SearchEventSink,
        popular_limit: int = 5,
    ) -> None:
        self.cache = cache
        self.ranker = ranker
        self.counters = counters
        self.search_log = search_log
        self.popular_limit = popular_limit
        self.started_at = time.monotonic()

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self.started_at, 3)

    async def popular_destinations(self) -> list[PopularDestination]:
        ranked = await self.ranker.top(self.popular_limit)
        return [PopularDestination(city=term, searches=score) for term, score in ranked]

    async def get_metrics(self) -> MetricsResponse:
        api_metrics = await self.counters.snapshot()
        hits = api_metrics.get(CACHE_HITS, 0)
        misses = api_metrics.get(CACHE_MISSES, 0)
        return MetricsResponse(
            database_stats=await self.search_log.search_stats(),
            cache_metrics=CacheMetrics(
                hit_rate=compute_hit_rate(hits, misses),
                total_hits=hits,
                total_misses=misses,
            ),
            api_metrics=api_metrics,
            popular_destinations=await self.popular_destinations(),
            system_health=MetricsHealth(
                redis_connected=await self.cache.healthy(),
                uptime_seconds=self.uptime_seconds(),
            ),
        )
