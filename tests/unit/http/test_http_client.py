"""Tests for the HTTP client and rate limiter."""

from __future__ import annotations

import httpx
import pytest

from balloonspine.http.client import HttpClient, HttpClientError
from balloonspine.http.rate_limiter import RateLimiter


class TestRateLimiter:
    """Tests for RateLimiter."""

    def test_min_interval(self) -> None:
        """Interval is the inverse of the rate."""
        assert RateLimiter(rate=4.0).min_interval == 0.25

    def test_rejects_non_positive_rate(self) -> None:
        """A zero rate would never allow a request."""
        with pytest.raises(ValueError):
            RateLimiter(rate=0)

    async def test_first_acquire_does_not_wait(self) -> None:
        """The first request goes out immediately."""
        assert await RateLimiter(rate=1.0).acquire() == 0.0

    async def test_second_acquire_waits(self) -> None:
        """Back-to-back requests are spaced out."""
        limiter = RateLimiter(rate=100.0)
        await limiter.acquire()
        waited = await limiter.acquire()
        assert 0.0 < waited <= 0.01

    async def test_reset(self) -> None:
        """After reset the next request does not wait."""
        limiter = RateLimiter(rate=1.0)
        await limiter.acquire()
        limiter.reset()
        assert await limiter.acquire() == 0.0


class TestHttpClient:
    """Tests for HttpClient."""

    def test_default_headers(self) -> None:
        """User agent and JSON accept header are always sent."""
        client = HttpClient(user_agent="test/1.0", headers={"X-Extra": "1"})
        assert client.headers == {
            "User-Agent": "test/1.0",
            "Accept": "application/json",
            "X-Extra": "1",
        }

    async def test_get_json(self) -> None:
        """Parses a JSON body."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"ok": True}))
        async with HttpClient(rate_limit=1000.0, transport=transport) as client:
            assert await client.get_json("https://example.com/x") == {"ok": True}

    @pytest.mark.parametrize("status", [404, 429, 503])
    async def test_status_errors(self, status: int) -> None:
        """Non-2xx responses raise HttpClientError."""
        transport = httpx.MockTransport(lambda r: httpx.Response(status))
        async with HttpClient(rate_limit=1000.0, transport=transport) as client:
            with pytest.raises(HttpClientError, match=str(status)) as exc_info:
                await client.get("https://example.com/x")
        assert exc_info.value.status_code == status

    async def test_timeout(self) -> None:
        """Timeouts raise HttpClientError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with HttpClient(rate_limit=1000.0, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(HttpClientError, match="timeout"):
                await client.get("https://example.com/x")

    async def test_invalid_json(self) -> None:
        """A non-JSON body raises HttpClientError."""
        transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))
        async with HttpClient(rate_limit=1000.0, transport=transport) as client:
            with pytest.raises(HttpClientError, match="invalid JSON"):
                await client.get_json("https://example.com/x")

    async def test_close_is_idempotent(self) -> None:
        """Closing twice is harmless."""
        client = HttpClient()
        await client.close()
        await client.close()
