"""Software-only simulation / demo - no real systems will be contacted or modified."""
import pytest

from backend.services.errors import BackendUnavailable, InvalidQuery, RateLimitExceeded
from backend.services.search_service import build_search_key


async def _search(services, city="Amsterdam", client="198.51.100.1", guests=2):
    return await services.search.search(city, "2025-01-10", "2025-01-11", guests, client)


def test_search_key_ignores_city_case():
    assert build_search_key("Amsterdam", "2025-01-10", "2025-01-11", 2) == build_search_key(
        " amsterdam ", "2025-01-10", "2025-01-11", 2
    )
    assert build_search_key("Paris", "2025-01-10", "2025-01-11", 2) != build_search_key(
        "Paris", "2025-01-10", "2025-01-11", 3
    )


@pytest.mark.asyncio
async def test_second_identical_search_is_served_from_cache(services, provider):
    first_results, first = await _search(services)
    second_results, second = await _search(services, city="AMSTERDAM")

    assert first.from_cache is False
    assert second.from_cache is True
    assert first_results == second_results
    assert [hotel.name for hotel in first_results] == ["Grand Hotel Amsterdam", "Amsterdam Canal View"]
    assert first.remaining_requests - second.remaining_requests == 1
    assert len(provider.calls) == 1
    assert await services.counters.snapshot() == {"cache_misses": 1, "cache_hits": 1}


@pytest.mark.asyncio
async def test_expired_entry_is_a_fresh_miss(services, clock, provider):
    await _search(services)
    clock.advance(300)
    _, metadata = await _search(services)

    assert metadata.from_cache is False
    assert await services.counters.get("cache_misses") == 2
    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_metadata_describes_the_query(services):
    results, metadata = await _search(services, city="Paris", guests=3)

    assert metadata.city == "Paris"
    assert metadata.checkin == "2025-01-10"
    assert metadata.checkout == "2025-01-11"
    assert metadata.guests == 3
    assert metadata.total_results == len(results) == 2
    assert metadata.response_time_ms >= 0
    assert metadata.remaining_requests == 99


@pytest.mark.asyncio
@pytest.mark.parametrize("city", ["", "   ", None])
async def test_missing_city_is_invalid(services, provider, city):
    with pytest.raises(InvalidQuery):
        await services.search.search(city, None, None, 2, "client")
    assert provider.calls == []
    assert services.limiter.window_for("client") is None


@pytest.mark.asyncio
async def test_rate_limit_is_enforced_before_lookup(services, provider):
    services.search.rate_limit = 2
    await _search(services)
    await _search(services)

    with pytest.raises(RateLimitExceeded) as excinfo:
        await _search(services)
    assert excinfo.value.remaining == 0
    assert len(provider.calls) == 1

    _, other = await _search(services, client="203.0.113.5")
    assert other.remaining_requests == 1


@pytest.mark.asyncio
async def test_backend_failure_is_not_cached(services, provider):
    provider.fail = True
    with pytest.raises(BackendUnavailable):
        await _search(services)

    provider.fail = False
    _, metadata = await _search(services)
    assert metadata.from_cache is False
    assert await services.counters.get("cache_misses") == 1


@pytest.mark.asyncio
async def test_backend_timeout_is_reported_as_unavailable(services, provider):
    provider.delay = 0.2
    services.search.backend_timeout_seconds = 0.01
    with pytest.raises(BackendUnavailable):
        await _search(services)
    assert await services.cache.get(build_search_key("Amsterdam", "2025-01-10", "2025-01-11", 2)) is None


@pytest.mark.asyncio
async def test_unavailable_cache_still_answers(services):
    services.cache.connected = False
    for _ in range(3):
        results, metadata = await _search(services)
        assert metadata.from_cache is False
        assert len(results) == 2
    assert await services.counters.get("cache_misses") == 3


@pytest.mark.asyncio
async def test_unavailable_ranker_still_answers(services):
    services.ranker.connected = False
    for _ in range(3):
        results, _ = await _search(services)
        assert len(results) == 2
    assert await services.ranker.top(5) == []


@pytest.mark.asyncio
async def test_unavailable_limiter_lets_every_search_through(services):
    services.limiter.connected = False
    for _ in range(3):
        results, metadata = await _search(services)
        assert len(results) == 2
        assert metadata.remaining_requests == 100


@pytest.mark.asyncio
async def test_every_search_counts_toward_popularity(services):
    await _search(services, city="Paris")
    await _search(services, city="paris")
    await _search(services, city="PARIS")
    await _search(services, city="Berlin")

    assert await services.ranker.top(5) == [("paris", 3), ("berlin", 1)]


@pytest.mark.asyncio
async def test_empty_result_set_is_not_an_error(services):
    results, metadata = await _search(services, city="Atlantis")
    assert results == []
    assert metadata.total_results == 0
    _, again = await _search(services, city="Atlantis")
    assert again.from_cache is True


@pytest.mark.asyncio
async def test_search_event_reaches_the_log(services, search_log):
    await _search(services)
    await _search(services)
    await services.background.drain()

    assert [event.cache_hit for event in search_log.events] == [False, True]
    event = search_log.events[0]
    assert event.city == "Amsterdam"
    assert event.result_count == 2
    assert event.guests == 2


@pytest.mark.asyncio
async def test_search_log_failure_does_not_fail_search(services, search_log):
    search_log.fail = True
    results, _ = await _search(services)
    await services.background.drain()

    assert len(results) == 2
    assert search_log.events == []
    assert services.background.pending == 0
