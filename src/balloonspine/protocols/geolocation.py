"""Geolocation provider protocol.

Supplies an initial map center. Best effort: ``None`` means unknown or
denied, which is not an error.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GeolocationProvider(Protocol):
    """Source of the user's current position."""

    async def current_position(self) -> tuple[float, float] | None:
        """Return ``(lat, lng)`` or None if unavailable."""
        ...
