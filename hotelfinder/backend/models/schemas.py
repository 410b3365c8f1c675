"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with attribute extraction enabled."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class Hotel(BaseSchema):
    id: int
    name: str
    city: str
    country: str
    price_per_night: float
    rating: float = 0.0
    amenities: Optional[str] = None
    available_rooms: int = 10
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class SearchMetadata(BaseSchema):
    city: str
    checkin: Optional[str] = None
    checkout: Optional[str] = None
    guests: int
    total_results: int
    response_time_ms: int
    from_cache: bool
    remaining_requests: int


class SearchResponse(BaseSchema):
    results: List[Hotel]
    metadata: SearchMetadata


class FallbackMetadata(BaseSchema):
    fallback: bool = True
    message: str


class FallbackResponse(BaseSchema):
    results: List[Hotel]
    metadata: FallbackMetadata


class SearchEvent(BaseSchema):
    city: str
    checkin: Optional[str] = None
    checkout: Optional[str] = None
    guests: int
    result_count: int
    elapsed_ms: int
    cache_hit: bool


class PopularDestination(BaseSchema):
    city: str
    searches: int


class PopularDestinationsResponse(BaseSchema):
    destinations: List[PopularDestination]


class PopularCity(BaseSchema):
    city: str
    search_count: int


class DatabaseStats(BaseSchema):
    total_searches: int = 0
    avg_response_time_ms: float = 0.0
    cache_hit_rate: float = 0.0
    popular_cities: List[PopularCity] = Field(default_factory=list)


class CacheMetrics(BaseSchema):
    hit_rate: float
    total_hits: int
    total_misses: int


class MetricsHealth(BaseSchema):
    redis_connected: bool
    uptime_seconds: float


class MetricsResponse(BaseSchema):
    database_stats: DatabaseStats
    cache_metrics: CacheMetrics
    api_metrics: Dict[str, int]
    popular_destinations: List[PopularDestination]
    system_health: MetricsHealth


class SystemHealth(BaseSchema):
    status: str
    timestamp: datetime
    uptime_seconds: float
    service: Optional[str] = None
    services: Dict[str, str] = Field(default_factory=dict)


class BookingCreate(BaseSchema):
    hotel_id: int
    checkin: str = Field(min_length=1)
    checkout: str = Field(min_length=1)
    guests: int = Field(default=2, ge=1)
    total_price: float = Field(gt=0)


class BookingConfirmation(BaseSchema):
    booking_id: str
    status: str
    message: str


class ReindexResponse(BaseSchema):
    message: str
    estimated_completion: str


class ErrorResponse(BaseSchema):
    error_code: str
    message: str
    remaining: Optional[int] = None
