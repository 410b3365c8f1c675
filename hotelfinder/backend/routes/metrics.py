"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import Services, count_request, get_services
from ..models.schemas import MetricsResponse, PopularDestinationsResponse

router = APIRouter(prefix="/api", tags=["metrics"], dependencies=[Depends(count_request)])


@router.get("/destinations/popular", response_model=PopularDestinationsResponse)
async def popular_destinations(services: Services = Depends(get_services)) -> PopularDestinationsResponse:
    return PopularDestinationsResponse(destinations=await services.dashboard.popular_destinations())


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(services: Services = Depends(get_services)) -> MetricsResponse:
    return await services.dashboard.get_metrics()
