"""Geocoder implementations."""

from balloonspine.geocoder.nominatim import NOMINATIM_REVERSE_URL, NominatimGeocoder

__all__ = ["NOMINATIM_REVERSE_URL", "NominatimGeocoder"]
