"""Async JSON client for public lookup services.

Wraps ``httpx.AsyncClient`` with an identifying User-Agent and a request
spacing policy, and reports every failure as ``HttpClientError``. One
attempt per call; callers decide what a failure means.

Example:
    >>> from balloonspine.http import HttpClient
    >>>
    >>> async with HttpClient(user_agent="BalloonSpine/0.1") as client:
    ...     place = await client.get_json(
    ...         "https://nominatim.openstreetmap.org/reverse",
    ...         params={"format": "json", "lat": 51.5, "lon": -0.09},
    ...     )
"""

from __future__ import annotations

from typing import Any

import httpx

from balloonspine.http.rate_limiter import RateLimiter


class HttpClientError(Exception):
    """A lookup request did not produce a usable response.

    Attributes:
        status_code: HTTP status for non-2xx responses, otherwise None.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    """Rate-limited JSON GETs over a lazily opened connection pool.

    Example:
        >>> client = HttpClient(user_agent="test/1.0", rate_limit=2.0)
        >>> client.headers["User-Agent"], client.rate_limit
        ('test/1.0', 2.0)

    Args:
        rate_limit: Requests per second.
        user_agent: Identifies the application to the service.
        timeout: Transport timeout in seconds.
        headers: Extra headers sent with every request.
        transport: Replacement httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        rate_limit: float = 1.0,
        user_agent: str = "BalloonSpine/0.1",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._limiter = RateLimiter(rate_limit)
        self.user_agent = user_agent
        self.timeout = timeout
        self.headers = {"Accept": "application/json", **(headers or {}), "User-Agent": user_agent}
        self._transport = transport
        self._session: httpx.AsyncClient | None = None

    @property
    def rate_limit(self) -> float:
        return self._limiter.rate

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.is_closed

    def _open(self) -> httpx.AsyncClient:
        if not self.is_open:
            self._session = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._session

    async def get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Send one GET after waiting for the rate limiter.

        Raises:
            HttpClientError: Transport failure, timeout or non-2xx status.
        """
        session = self._open()
        await self._limiter.acquire()
        try:
            response = await session.get(url, params=params)
        except httpx.TimeoutException as e:
            raise HttpClientError(f"timeout after {self.timeout}s: {e}") from e
        except httpx.RequestError as e:
            raise HttpClientError(f"request to {url} failed: {e}") from e

        if response.is_error:
            raise HttpClientError(
                f"HTTP {response.status_code} from {response.url.host}",
                status_code=response.status_code,
            )
        return response

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET and decode the body as JSON.

        Raises:
            HttpClientError: As for ``get``, or when the body is not JSON.
        """
        response = await self.get(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise HttpClientError(f"invalid JSON from {response.url.host}: {e}") from e

    async def close(self) -> None:
        if self.is_open:
            await self._session.aclose()
        self._session = None

    async def __aenter__(self) -> HttpClient:
        self._open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["HttpClient", "HttpClientError"]
