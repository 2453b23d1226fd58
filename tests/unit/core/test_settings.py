"""Tests for Settings and get_settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from balloonspine.core.config import Settings, get_settings
from balloonspine.core.exceptions import ConfigurationError


class TestSettings:
    """Defaults, environment and validation."""

    def test_defaults(self) -> None:
        """Defaults match the public map and storage layout."""
        settings = Settings()
        assert settings.storage_key == "balloonSightings"
        assert (settings.default_lat, settings.default_lng, settings.default_zoom) == (51.505, -0.09, 13)
        assert settings.located_zoom == 15
        assert settings.geocoder_url == "https://nominatim.openstreetmap.org/reverse"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """BALLOONSPINE_ variables are picked up."""
        monkeypatch.setenv("BALLOONSPINE_STORAGE_PATH", "/tmp/sightings")
        monkeypatch.setenv("BALLOONSPINE_DEFAULT_ZOOM", "9")

        settings = Settings()

        assert settings.storage_path == Path("/tmp/sightings")
        assert settings.default_zoom == 9

    def test_log_level_normalized(self) -> None:
        """Log levels are case-insensitive."""
        assert get_settings(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize(
        "overrides",
        [{"log_level": "LOUD"}, {"default_lat": 120.0}, {"geocoder_rate_limit": 0}, {"storage_key": ""}],
    )
    def test_invalid_values(self, overrides: dict) -> None:
        """Invalid settings raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            get_settings(**overrides)
