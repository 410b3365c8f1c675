"""Software-only simulation / demo - no real systems will be contacted or modified."""
import pytest

from backend.models.schemas import BookingCreate

BOOKING = {"hotel_id": 3, "checkin": "2025-02-01", "checkout": "2025-02-03", "guests": 2, "total_price": 640}


def test_booking_is_confirmed_and_stored(client, services, booking_store):
    response = client.post("/api/book", json=BOOKING)
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "confirmed"
    assert payload["booking_id"]

    metrics = client.get("/api/metrics").json()["api_metrics"]
    assert metrics["bookings_created"] == 1
    assert payload["booking_id"] in booking_store.bookings


def test_booking_requires_fields(client):
    response = client.post("/api/book", json={"hotel_id": 3})
    assert response.status_code == 422


def test_reindex_is_scheduled(client):
    response = client.post("/api/admin/reindex")
    assert response.status_code == 200
    assert response.json() == {"message": "Search index rebuild started", "estimated_completion": "0 seconds"}


@pytest.mark.asyncio
async def test_confirmation_and_reindex_run_in_background(services, booking_store):
    confirmation = await services.bookings.create_booking(BookingCreate(**BOOKING))
    services.bookings.schedule_reindex()
    await services.background.drain()

    snapshot = await services.counters.snapshot()
    assert snapshot == {"bookings_created": 1, "booking_confirmations_sent": 1, "index_rebuilds": 1}
    assert booking_store.bookings[confirmation.booking_id].total_price == 640


@pytest.mark.asyncio
async def test_booking_is_stored_before_confirmation_returns(services, booking_store):
    confirmation = await services.bookings.create_booking(BookingCreate(**BOOKING))
    assert confirmation.booking_id in booking_store.bookings


@pytest.mark.asyncio
async def test_shutdown_lets_pending_confirmations_finish(services):
    services.bookings.confirmation_delay_seconds = 0.05
    await services.bookings.create_booking(BookingCreate(**BOOKING))
    assert services.background.pending == 1

    await services.shutdown()

    assert services.background.pending == 0
    assert await services.counters.get("booking_confirmations_sent") == 1


@pytest.mark.asyncio
async def test_shutdown_cancels_tasks_past_grace_period(services):
    services.shutdown_grace_seconds = 0.01
    services.bookings.reindex_delay_seconds = 30
    services.bookings.schedule_reindex()

    await services.shutdown()

    assert services.background.pending == 0
    assert await services.counters.get("index_rebuilds") == 0
