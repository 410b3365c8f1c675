"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import asyncio
import uuid

from ..logging_config import logger
from ..models.schemas import BookingConfirmation, BookingCreate, ReindexResponse
from ..utils.background import BackgroundRunner
from ..utils.metrics import BOOKINGS_CREATED, BOOKING_CONFIRMATIONS_SENT, INDEX_REBUILDS, MetricsCounters
from .hotel_store import BookingStore


class BookingService:
    """Booking intake plus the simulated slow jobs that follow it."""

    def __init__(
        self,
        store: BookingStore,
        counters: MetricsCounters,
        background: BackgroundRunner,
        confirmation_delay_seconds: float = 2.0,
        reindex_delay_seconds: float = 5.0,
    ) -> None:
        self.store = store
        self.counters = counters
        self.background = background
        self.confirmation_delay_seconds = confirmation_delay_seconds
        self.reindex_delay_seconds = reindex_delay_seconds

    async def create_booking(self, booking: BookingCreate) -> BookingConfirmation:
        booking_id = str(uuid.uuid4())
        await self.store.create_booking(booking_id, booking)
        self.background.spawn(self._send_confirmation(booking_id), name=f"confirmation-{booking_id}")
        await self.counters.increment(BOOKINGS_CREATED)
        logger.info("booking.created", booking_id=booking_id, hotel_id=booking.hotel_id)
        return BookingConfirmation(
            booking_id=booking_id,
            status="confirmed",
            message="Booking confirmed! Confirmation email will be sent shortly.",
        )

    async def _send_confirmation(self, booking_id: str) -> None:
        await asyncio.sleep(self.confirmation_delay_seconds)
        logger.info("booking.confirmation_sent", booking_id=booking_id)
        await self.counters.increment(BOOKING_CONFIRMATIONS_SENT)

    def schedule_reindex(self) -> ReindexResponse:
        self.background.spawn(self._reindex(), name="search-reindex")
        return ReindexResponse(
            message="Search index rebuild started",
            estimated_completion=f"{self.reindex_delay_seconds:g} seconds",
        )

    async def _reindex(self) -> None:
        await asyncio.sleep(self.reindex_delay_seconds)
        logger.info("search.reindex_completed")
        await self.counters.increment(INDEX_REBUILDS)
