"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from typing import Protocol

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..database import Database
from ..logging_config import logger
from ..models.schemas import BookingCreate, DatabaseStats, Hotel, PopularCity, SearchEvent
from .errors import ProviderUnavailable


class HotelProvider(Protocol):
    async def find_by_city(self, city: str) -> list[Hotel]: ...


class SearchEventSink(Protocol):
    async def log_search(self, event: SearchEvent) -> None: ...

    async def search_stats(self) -> DatabaseStats: ...


class BookingStore(Protocol):
    async def create_booking(self, booking_id: str, booking: BookingCreate) -> None: ...


class SqlHotelProvider:
    """Hotel lookups against the relational store, best rated first."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def find_by_city(self, city: str) -> list[Hotel]:
        try:
            async with self._database.sessions() as session:
                result = await session.execute(
                    text(
                        """
                        SELECT id, name, city, country, price_per_night, rating, amenities, available_rooms, latitude, longitude
                        FROM hotels
                        WHERE LOWER(city) LIKE LOWER(:pattern)
                        ORDER BY rating DESC
                        """
                    ),
                    {"pattern": f"%{city}%"},
                )
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            logger.warning("hotels.lookup_failed", city=city, error=str(exc))
            raise ProviderUnavailable(f"Hotel lookup failed for {city!r}") from exc
        return [Hotel(**dict(row)) for row in rows]


class SqlSearchLog:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def log_search(self, event: SearchEvent) -> None:
        async with self._database.sessions() as session:
            await session.execute(
                text(
                    """
                    INSERT INTO search_logs (city, checkin_date, checkout_date, guests, results_count, response_time_ms, cache_hit)
                    VALUES (:city, :checkin, :checkout, :guests, :result_count, :elapsed_ms, :cache_hit)
                    """
                ),
                event.model_dump(),
            )
            await session.commit()

    async def search_stats(self) -> DatabaseStats:
        try:
            async with self._database.sessions() as session:
                summary = (
                    await session.execute(
                        text(
                            """
                            SELECT COUNT(*) AS total,
                                   AVG(response_time_ms) AS avg_time,
                                   SUM(CASE WHEN cache_hit THEN 1 ELSE 0 END) AS hits
                            FROM search_logs
                            """
                        )
                    )
                ).mappings().one()
                cities = (
                    await session.execute(
                        text(
                            """
                            SELECT city, COUNT(*) AS search_count
                            FROM search_logs
                            GROUP BY city
                            ORDER BY search_count DESC, city ASC
                            LIMIT 5
                            """
                        )
                    )
                ).mappings().all()
        except SQLAlchemyError as exc:
            logger.warning("search_log.stats_failed", error=str(exc))
            return DatabaseStats()
        total = summary["total"] or 0
        hit_rate = round(100.0 * (summary["hits"] or 0) / total, 2) if total else 0.0
        return DatabaseStats(
            total_searches=total,
            avg_response_time_ms=round(float(summary["avg_time"] or 0.0), 2),
            cache_hit_rate=hit_rate,
            popular_cities=[PopularCity(city=row["city"], search_count=row["search_count"]) for row in cities],
        )


class SqlBookingStore:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def create_booking(self, booking_id: str, booking: BookingCreate) -> None:
        async with self._database.sessions() as session:
            await session.execute(
                text(
                    """
                    INSERT INTO bookings (id, hotel_id, checkin_date, checkout_date, guests, total_price, status)
                    VALUES (:id, :hotel_id, :checkin, :checkout, :guests, :total_price, 'confirmed')
                    """
                ),
                {"id": booking_id, **booking.model_dump()},
            )
            await session.commit()
