"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.cache import MemoryCache
from backend.database import SEED_HOTELS
from backend.dependencies import Services, set_services
from backend.models.schemas import BookingCreate, DatabaseStats, Hotel, PopularCity, SearchEvent
from backend.services.bookings import BookingService
from backend.services.dashboard import DashboardService
from backend.services.errors import ProviderUnavailable
from backend.services.search_service import SearchService
from backend.utils.background import BackgroundRunner
from backend.utils.metrics import MemoryCounters
from backend.utils.ranking import MemoryRanker
from backend.utils.rate_limiter import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryHotelProvider:
    def __init__(self) -> None:
        self.hotels = [Hotel(id=index, **record) for index, record in enumerate(SEED_HOTELS, start=1)]
        self.calls: list[str] = []
        self.fail = False
        self.delay = 0.0

    async def find_by_city(self, city: str) -> list[Hotel]:
        self.calls.append(city)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ProviderUnavailable("hotel store offline")
        matches = [hotel for hotel in self.hotels if city.lower() in hotel.city.lower()]
        return sorted(matches, key=lambda hotel: hotel.rating, reverse=True)


class RecordingSearchLog:
    def __init__(self) -> None:
        self.events: list[SearchEvent] = []
        self.fail = False

    async def log_search(self, event: SearchEvent) -> None:
        if self.fail:
            raise RuntimeError("search log unavailable")
        self.events.append(event)

    async def search_stats(self) -> DatabaseStats:
        counts: dict[str, int] = {}
        for event in self.events:
            counts[event.city] = counts.get(event.city, 0) + 1
        return DatabaseStats(
            total_searches=len(self.events),
            popular_cities=[PopularCity(city=city, search_count=count) for city, count in counts.items()],
        )


class RecordingBookingStore:
    def __init__(self) -> None:
        self.bookings: dict[str, BookingCreate] = {}

    async def create_booking(self, booking_id: str, booking: BookingCreate) -> None:
        self.bookings[booking_id] = booking


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def provider() -> InMemoryHotelProvider:
    return InMemoryHotelProvider()


@pytest.fixture()
def search_log() -> RecordingSearchLog:
    return RecordingSearchLog()


@pytest.fixture()
def booking_store() -> RecordingBookingStore:
    return RecordingBookingStore()


@pytest.fixture()
def services(clock, provider, search_log, booking_store) -> Services:
    cache = MemoryCache(clock=clock)
    ranker = MemoryRanker()
    limiter = FixedWindowRateLimiter(clock=clock)
    counters = MemoryCounters()
    background = BackgroundRunner()
    search = SearchService(provider, cache, ranker, limiter, counters, search_log, background)
    return Services(
        cache=cache,
        ranker=ranker,
        limiter=limiter,
        counters=counters,
        background=background,
        search=search,
        dashboard=DashboardService(cache, ranker, counters, search_log),
        bookings=BookingService(
            booking_store,
            counters,
            background,
            confirmation_delay_seconds=0,
            reindex_delay_seconds=0,
        ),
    )


@pytest.fixture()
def client(services):
    set_services(services)
    with TestClient(app) as test_client:
        yield test_client
    set_services(None)
