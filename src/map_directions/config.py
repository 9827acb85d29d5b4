"""
Application settings.

Values come from environment variables prefixed with ``MAP_DIRECTIONS_``
(or a local ``.env`` file), e.g. ``MAP_DIRECTIONS_LOCATION_TIMEOUT_S=5``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the directions core and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="MAP_DIRECTIONS_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "map-directions"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Simulated device position used by the CLI (Perth CBD)
    lat: float = Field(default=-31.950934, ge=-90, le=90)
    lon: float = Field(default=115.859966, ge=-180, le=180)

    location_timeout_s: float = Field(default=10.0, gt=0)
    region_padding: float = Field(default=0.005, ge=0)

    osrm_base_url: str = "https://routing.openstreetmap.de/routed-foot"
    http_timeout_s: float = Field(default=15.0, gt=0)

    mapillary_token: str | None = None
    panorama_search_radius_deg: float = Field(default=0.0005, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
