"""Tests for the Nominatim reverse geocoder."""

from __future__ import annotations

import httpx
import pytest

from balloonspine.core.config import Settings
from balloonspine.geocoder.nominatim import NOMINATIM_REVERSE_URL, NominatimGeocoder
from balloonspine.http.client import HttpClient
from balloonspine.protocols.geocoder import EnrichmentStatus, Geocoder


def make_geocoder(handler) -> NominatimGeocoder:
    client = HttpClient(rate_limit=1000.0, transport=httpx.MockTransport(handler))
    return NominatimGeocoder(client=client)


class TestNominatimGeocoder:
    """resolve_address() outcomes."""

    async def test_success_returns_display_name(self) -> None:
        """The display name becomes the address."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"display_name": " 10 Downing St, London "})

        geocoder = make_geocoder(handler)
        result = await geocoder.resolve_address(51.505, -0.09)

        assert result.ok
        assert result.address == "10 Downing St, London"
        params = seen[0].url.params
        assert params["format"] == "json"
        assert params["lat"] == "51.505"
        assert params["lon"] == "-0.09"
        assert seen[0].headers["User-Agent"].startswith("BalloonSpine")

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, text="boom"),
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=["a", "b"]),
            httpx.Response(200, json={"error": "Unable to geocode"}),
            httpx.Response(200, json={"display_name": "   "}),
            httpx.Response(200, json={"place_id": 1}),
        ],
        ids=["status", "invalid-json", "not-object", "error-key", "blank-name", "no-name"],
    )
    async def test_bad_responses_fail_softly(self, response: httpx.Response) -> None:
        """Every bad answer is a FAILED result, never an exception."""
        geocoder = make_geocoder(lambda request: response)

        result = await geocoder.resolve_address(0.0, 0.0)

        assert result.status is EnrichmentStatus.FAILED
        assert result.address is None
        assert result.error_message

    async def test_transport_error_fails_softly(self) -> None:
        """Network errors are reported as a FAILED result."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await make_geocoder(handler).resolve_address(0.0, 0.0)

        assert not result.ok
        assert "connection refused" in result.error_message


class TestNominatimGeocoderLifecycle:
    """Construction and client ownership."""

    def test_from_settings(self) -> None:
        """Endpoint and client options come from settings."""
        settings = Settings(
            geocoder_url="http://localhost:8080/reverse",
            user_agent="tests/1.0",
            request_timeout=5.0,
        )
        geocoder = NominatimGeocoder.from_settings(settings)

        assert geocoder.url == "http://localhost:8080/reverse"
        assert geocoder._client.user_agent == "tests/1.0"
        assert geocoder._client.timeout == 5.0

    def test_default_url(self) -> None:
        """The public OpenStreetMap endpoint is the default."""
        assert NominatimGeocoder().url == NOMINATIM_REVERSE_URL

    async def test_does_not_close_shared_client(self) -> None:
        """A client passed in stays open after close()."""
        client = HttpClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
        async with client:
            async with NominatimGeocoder(client=client):
                pass
            assert client.is_open

    def test_implements_protocol(self) -> None:
        """NominatimGeocoder satisfies Geocoder."""
        assert isinstance(NominatimGeocoder(), Geocoder)
