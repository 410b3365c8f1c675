"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import Services, client_id, count_request, get_services
from ..models.schemas import FallbackMetadata, FallbackResponse, Hotel, SearchResponse

router = APIRouter(prefix="/api", tags=["search"], dependencies=[Depends(count_request)])


@router.get("/search", response_model=SearchResponse)
async def search_hotels(
    city: str = Query("", description="City to search in"),
    checkin: Optional[str] = None,
    checkout: Optional[str] = None,
    guests: int = Query(2, ge=1),
    caller: str = Depends(client_id),
    services: Services = Depends(get_services),
) -> SearchResponse:
    results, metadata = await services.search.search(city, checkin, checkout, guests, caller)
    return SearchResponse(results=results, metadata=metadata)


@router.get("/search/fallback", response_model=FallbackResponse)
async def search_fallback(city: Optional[str] = None) -> FallbackResponse:
    fallback_hotel = Hotel(
        id=999,
        name="Fallback Hotel",
        city=city or "Unknown",
        country="N/A",
        price_per_night=100,
        rating=3.5,
        amenities="Basic amenities available",
    )
    return FallbackResponse(
        results=[fallback_hotel],
        metadata=FallbackMetadata(message="Main search service unavailable - showing cached results"),
    )
