"""BalloonSpine configuration.

Application settings loaded from environment variables with BALLOONSPINE_ prefix.

Example:
    >>> from balloonspine.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.storage_key
    'balloonSightings'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pydantic
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from balloonspine.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with BALLOONSPINE_ prefix.

    Example:
        >>> from balloonspine.core.config import Settings
        >>> s = Settings(storage_path="/tmp/sightings")
        >>> s.storage_path
        PosixPath('/tmp/sightings')
        >>> s.default_zoom
        13
    """

    model_config = SettingsConfigDict(
        env_prefix="BALLOONSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_path: Path = Field(default=Path("./data"), description="Directory for the JSON snapshot")
    storage_key: str = Field(default="balloonSightings", min_length=1)

    # Geocoding
    geocoder_url: str = Field(default="https://nominatim.openstreetmap.org/reverse")
    user_agent: str = Field(default="BalloonSpine/0.1 (balloon canister sightings)")
    request_timeout: float = Field(default=30.0, ge=1.0)
    geocoder_rate_limit: float = Field(default=1.0, gt=0.0, description="Requests per second")

    # Map
    default_lat: float = Field(default=51.505, ge=-90.0, le=90.0)
    default_lng: float = Field(default=-0.09)
    default_zoom: int = Field(default=13, ge=0, le=20)
    located_zoom: int = Field(default=15, ge=0, le=20)
    map_output: Path = Field(default=Path("./sightings.html"))

    # Attachments
    max_attachment_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Raises:
        ConfigurationError: If a value (from overrides or the environment)
            is invalid.

    Example:
        >>> from balloonspine.core.config import get_settings
        >>> s = get_settings(request_timeout=5.0)
        >>> s.request_timeout
        5.0
    """
    try:
        return Settings(**overrides)
    except pydantic.ValidationError as e:
        raise ConfigurationError(str(e)) from e
