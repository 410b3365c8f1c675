"""Software-only simulation / demo - no real systems will be contacted or modified."""
from functools import lru_cache
from typing import Literal

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "HotelFinder"
    host: str = "0.0.0.0"
    port: int = 6969
    database_url: str = "sqlite+aiosqlite:///./hotels.db"
    redis_url: AnyUrl = Field("redis://localhost:6379/0")
    cache_backend: Literal["memory", "redis"] = "memory"
    search_cache_ttl_seconds: int = Field(default=300, ge=1)
    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: int = Field(default=3600, ge=1)
    backend_timeout_seconds: float = 5.0
    popular_destinations_limit: int = 5
    booking_confirmation_delay_seconds: float = 2.0
    reindex_delay_seconds: float = 5.0
    shutdown_grace_seconds: float = 5.0
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
