"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import Services, count_request, get_services
from ..models.schemas import BookingConfirmation, BookingCreate, ReindexResponse

router = APIRouter(prefix="/api", tags=["bookings"], dependencies=[Depends(count_request)])


@router.post("/book", response_model=BookingConfirmation)
async def book(payload: BookingCreate, services: Services = Depends(get_services)) -> BookingConfirmation:
    return await services.bookings.create_booking(payload)


@router.post("/admin/reindex", response_model=ReindexResponse)
async def reindex(services: Services = Depends(get_services)) -> ReindexResponse:
    return services.bookings.schedule_reindex()
