"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_TOTAL_PERIODS = 36_500


class Settings(BaseSettings):
    """Configuration options for the calculator API."""

    app_name: str = Field("investcalc", description="Name reported in logs")
    log_level: str = Field("INFO", description="Root log level used by create_app()")
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call /api/*",
    )
    max_total_periods: int = Field(
        DEFAULT_MAX_TOTAL_PERIODS,
        ge=1,
        description="Upper bound on years * periods_per_year for one simulation",
    )
    host: str = Field("127.0.0.1")
    port: int = Field(5000)
    debug: bool = Field(False)

    model_config = SettingsConfigDict(env_prefix="INVESTCALC_", env_file=".env", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings."""

    return Settings()


__all__ = ["DEFAULT_MAX_TOTAL_PERIODS", "Settings", "get_settings"]
