"""Geolocation providers."""

from balloonspine.geolocation.static import StaticLocationProvider

__all__ = ["StaticLocationProvider"]
