"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .dependencies import get_services
from .logging_config import logger, setup_logging
from .models.schemas import ErrorResponse
from .routes import bookings, health, metrics, search
from .services.errors import RateLimitExceeded, SearchError

setup_logging()
settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    services = get_services()
    await services.startup()
    logger.info("app.start", cache_backend=settings.cache_backend)
    try:
        yield
    finally:
        await services.shutdown()
        logger.info("app.stop")


app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SearchError)
async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    logger.warning("search.error", path=str(request.url.path), error_code=exc.error_code, reason=str(exc))
    body = ErrorResponse(error_code=exc.error_code, message=str(exc))
    if isinstance(exc, RateLimitExceeded):
        body.remaining = exc.remaining
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        body = ErrorResponse(error_code="NOT_FOUND", message="Endpoint not found")
    else:
        body = ErrorResponse(error_code="HTTP_ERROR", message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


app.include_router(health.router)
app.include_router(search.router)
app.include_router(metrics.router)
app.include_router(bookings.router)
