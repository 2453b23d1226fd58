"""Request spacing for public lookup services.

The public Nominatim policy allows one request per second per application.

Example:
    >>> from balloonspine.http import RateLimiter
    >>> RateLimiter(rate=2.0).min_interval
    0.5
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable


class RateLimiter:
    """Keeps at least ``1 / rate`` seconds between consecutive acquisitions.

    Concurrent callers queue on a lock, so bursts are serialized rather
    than dropped.

    Args:
        rate: Requests per second; must be positive.
        clock: Monotonic time source in seconds.
    """

    def __init__(self, rate: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        self.rate = rate
        self.min_interval = 1.0 / rate
        self._clock = clock
        self._next_slot: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """Wait for the next free slot. Returns the seconds slept."""
        async with self._lock:
            delay = 0.0
            if self._next_slot is not None:
                delay = max(0.0, self._next_slot - self._clock())
                if delay:
                    await asyncio.sleep(delay)
            self._next_slot = self._clock() + self.min_interval
            return delay

    def reset(self) -> None:
        """Let the next request go out immediately."""
        self._next_slot = None
