"""Nominatim reverse geocoder.

Resolves coordinates to the ``display_name`` returned by an OpenStreetMap
Nominatim ``/reverse`` endpoint.

Example:
    >>> from balloonspine.geocoder.nominatim import NominatimGeocoder
    >>> geocoder = NominatimGeocoder()
    >>> geocoder.url
    'https://nominatim.openstreetmap.org/reverse'
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from balloonspine.http.client import HttpClient, HttpClientError
from balloonspine.protocols.geocoder import AddressResult

if TYPE_CHECKING:
    from balloonspine.core.config import Settings

logger = logging.getLogger(__name__)

NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"


class NominatimGeocoder:
    """Best-effort reverse geocoding over HTTP.

    One attempt per lookup and no timeout beyond the client's transport
    default. Every failure comes back as a FAILED ``AddressResult``.

    Args:
        url: Reverse geocoding endpoint.
        client: HTTP client to use; one is created (and owned) if omitted.
        user_agent: User-Agent for the created client. Nominatim rejects
            requests without an identifying agent.
        timeout: Transport timeout for the created client.
        rate_limit: Requests per second for the created client.
    """

    def __init__(
        self,
        url: str = NOMINATIM_REVERSE_URL,
        client: HttpClient | None = None,
        user_agent: str = "BalloonSpine/0.1",
        timeout: float = 30.0,
        rate_limit: float = 1.0,
    ) -> None:
        self._url = url
        self._owns_client = client is None
        self._client = client or HttpClient(
            rate_limit=rate_limit,
            user_agent=user_agent,
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> NominatimGeocoder:
        return cls(
            url=settings.geocoder_url,
            user_agent=settings.user_agent,
            timeout=settings.request_timeout,
            rate_limit=settings.geocoder_rate_limit,
        )

    @property
    def url(self) -> str:
        return self._url

    async def resolve_address(self, lat: float, lng: float) -> AddressResult:
        """Look up the display address for a coordinate."""
        start = time.perf_counter()
        params = {"format": "json", "lat": lat, "lon": lng}
        try:
            data = await self._client.get_json(self._url, params=params)
        except HttpClientError as e:
            return self._failed(f"{e}", start)

        if not isinstance(data, dict):
            return self._failed("response is not a JSON object", start)
        if "error" in data:
            return self._failed(f"geocoder error: {data['error']}", start)
        display_name = data.get("display_name")
        if not isinstance(display_name, str) or not display_name.strip():
            return self._failed("response has no display_name", start)

        duration_ms = (time.perf_counter() - start) * 1000
        return AddressResult.success(display_name.strip(), duration_ms=duration_ms)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> NominatimGeocoder:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @staticmethod
    def _failed(message: str, start: float) -> AddressResult:
        logger.warning("Reverse geocoding failed: %s", message)
        return AddressResult.failure(message, duration_ms=(time.perf_counter() - start) * 1000)
