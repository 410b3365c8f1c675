"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .logging_config import logger

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS hotels (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        city TEXT NOT NULL,
        country TEXT NOT NULL,
        price_per_night REAL NOT NULL,
        rating REAL DEFAULT 0,
        amenities TEXT,
        available_rooms INTEGER DEFAULT 10,
        latitude REAL,
        longitude REAL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS search_logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        city TEXT,
        checkin_date TEXT,
        checkout_date TEXT,
        guests INTEGER,
        results_count INTEGER,
        response_time_ms INTEGER,
        cache_hit BOOLEAN DEFAULT 0,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS bookings (
        id TEXT PRIMARY KEY,
        hotel_id INTEGER,
        checkin_date TEXT,
        checkout_date TEXT,
        guests INTEGER,
        total_price REAL,
        status TEXT DEFAULT 'pending',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY(hotel_id) REFERENCES hotels(id)
    )
    """,
)

SEED_HOTELS: list[dict[str, object]] = [
    {"name": "Grand Hotel Amsterdam", "city": "Amsterdam", "country": "Netherlands", "price_per_night": 250.0, "rating": 4.5, "amenities": "WiFi,Pool,Spa,Restaurant", "available_rooms": 15, "latitude": 52.3676, "longitude": 4.9041},
    {"name": "Hotel Berlin Central", "city": "Berlin", "country": "Germany", "price_per_night": 180.0, "rating": 4.2, "amenities": "WiFi,Gym,Bar,Restaurant", "available_rooms": 20, "latitude": 52.5200, "longitude": 13.4050},
    {"name": "Paris Luxury Suite", "city": "Paris", "country": "France", "price_per_night": 320.0, "rating": 4.8, "amenities": "WiFi,Spa,Restaurant,RoomService", "available_rooms": 8, "latitude": 48.8566, "longitude": 2.3522},
    {"name": "London Bridge Hotel", "city": "London", "country": "UK", "price_per_night": 280.0, "rating": 4.4, "amenities": "WiFi,Gym,Bar,Concierge", "available_rooms": 12, "latitude": 51.5074, "longitude": -0.1278},
    {"name": "Barcelona Beach Resort", "city": "Barcelona", "country": "Spain", "price_per_night": 220.0, "rating": 4.6, "amenities": "WiFi,Pool,Beach,Restaurant", "available_rooms": 25, "latitude": 41.3851, "longitude": 2.1734},
    {"name": "Rome Historic Inn", "city": "Rome", "country": "Italy", "price_per_night": 190.0, "rating": 4.3, "amenities": "WiFi,Restaurant,Tours", "available_rooms": 18, "latitude": 41.9028, "longitude": 12.4964},
    {"name": "Amsterdam Canal View", "city": "Amsterdam", "country": "Netherlands", "price_per_night": 200.0, "rating": 4.1, "amenities": "WiFi,CanalView,Bikes", "available_rooms": 10, "latitude": 52.3676, "longitude": 4.9041},
    {"name": "Berlin Modern Loft", "city": "Berlin", "country": "Germany", "price_per_night": 160.0, "rating": 4.0, "amenities": "WiFi,Kitchen,ModernDesign", "available_rooms": 16, "latitude": 52.5200, "longitude": 13.4050},
    {"name": "Paris Boutique Hotel", "city": "Paris", "country": "France", "price_per_night": 290.0, "rating": 4.7, "amenities": "WiFi,Boutique,Restaurant,Spa", "available_rooms": 6, "latitude": 48.8566, "longitude": 2.3522},
    {"name": "London City Center", "city": "London", "country": "UK", "price_per_night": 240.0, "rating": 4.2, "amenities": "WiFi,Central,Shopping,Theater", "available_rooms": 14, "latitude": 51.5074, "longitude": -0.1278},
]


class Database:
    def __init__(self, url: str) -> None:
        self.engine: AsyncEngine = create_async_engine(url, echo=False, future=True)
        self.sessions = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    async def init(self) -> None:
        async with self.engine.begin() as conn:
            for statement in SCHEMA:
                await conn.execute(text(statement))
            count = (await conn.execute(text("SELECT COUNT(*) FROM hotels"))).scalar_one()
            if count == 0:
                await conn.execute(
                    text(
                        """
                        INSERT INTO hotels (name, city, country, price_per_night, rating, amenities, available_rooms, latitude, longitude)
                        VALUES (:name, :city, :country, :price_per_night, :rating, :amenities, :available_rooms, :latitude, :longitude)
                        """
                    ),
                    SEED_HOTELS,
                )
                logger.info("database.seeded", hotels=len(SEED_HOTELS))

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
