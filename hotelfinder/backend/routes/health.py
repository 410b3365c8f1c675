"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..dependencies import Services, get_services
from ..models.schemas import SystemHealth

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health(services: Services = Depends(get_services)) -> SystemHealth:
    return SystemHealth(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=services.dashboard.uptime_seconds(),
        service="hotel-search-primary",
    )


@router.get("/health/detailed", response_model=SystemHealth)
async def health_detailed(services: Services = Depends(get_services)) -> SystemHealth:
    database = await services.database_connected()
    components = {
        "database": "simulated" if database is None else ("connected" if database else "disconnected"),
        "redis": "connected" if await services.cache.healthy() else "disconnected",
        "api": "operational",
    }
    return SystemHealth(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=services.dashboard.uptime_seconds(),
        services=components,
    )
