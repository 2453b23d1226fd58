"""BalloonSpine HTTP utilities.

Example:
    >>> from balloonspine.http import RateLimiter, HttpClient
    >>>
    >>> limiter = RateLimiter(rate=1.0)
    >>> await limiter.acquire()
    >>>
    >>> async with HttpClient(rate_limit=1.0) as client:
    ...     data = await client.get_json("https://example.com/api")
"""

from balloonspine.http.client import HttpClient, HttpClientError
from balloonspine.http.rate_limiter import RateLimiter

__all__ = [
    "HttpClient",
    "HttpClientError",
    "RateLimiter",
]
