"""Fixed-position geolocation provider.

Example:
    >>> import asyncio
    >>> from balloonspine.geolocation.static import StaticLocationProvider
    >>> asyncio.run(StaticLocationProvider((48.85, 2.35)).current_position())
    (48.85, 2.35)
    >>> asyncio.run(StaticLocationProvider().current_position()) is None
    True
"""

from __future__ import annotations


class StaticLocationProvider:
    """Returns a configured position, or None when there is none (denied)."""

    def __init__(self, position: tuple[float, float] | None = None) -> None:
        self._position = position

    async def current_position(self) -> tuple[float, float] | None:
        return self._position
