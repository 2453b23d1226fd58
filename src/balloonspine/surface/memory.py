"""In-memory map surface.

Records every marker, popup and handler so tests and headless front ends can
inspect the view and simulate user interaction.

Example:
    >>> from balloonspine.surface.memory import MemoryMapSurface
    >>> surface = MemoryMapSurface()
    >>> handle = surface.add_marker(51.5, -0.09)
    >>> surface.bind_popup(handle, "<p>hi</p>")
    >>> surface.popup(handle)
    '<p>hi</p>'
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any

from balloonspine.core.exceptions import MapSurfaceUnavailableError
from balloonspine.protocols.map_surface import ActionCallback, ClickCallback


@dataclass
class MemoryMarker:
    """A marker placed on a ``MemoryMapSurface``."""

    handle: int
    lat: float
    lng: float
    popup: str | None = None
    actions: dict[str, ActionCallback] = field(default_factory=dict)


class MemoryMapSurface:
    """Map surface that keeps its state in dictionaries.

    Set ``available`` to False to make every call raise
    ``MapSurfaceUnavailableError``.

    Best for: Testing, headless use.
    """

    def __init__(self) -> None:
        self.markers: dict[int, MemoryMarker] = {}
        self.view: tuple[float, float, int] | None = None
        self.available = True
        self._click_handlers: list[ClickCallback] = []
        self._next_handle = 1

    def _check(self) -> None:
        if not self.available:
            raise MapSurfaceUnavailableError("memory map surface is unavailable")

    # --- MapSurface ---

    def add_marker(self, lat: float, lng: float) -> int:
        self._check()
        handle = self._next_handle
        self._next_handle += 1
        self.markers[handle] = MemoryMarker(handle=handle, lat=lat, lng=lng)
        return handle

    def remove_marker(self, handle: int) -> None:
        self._check()
        self.markers.pop(handle, None)

    def bind_popup(self, handle: int, html: str) -> None:
        self._check()
        self.markers[handle].popup = html

    def bind_action(self, handle: int, name: str, callback: ActionCallback) -> None:
        self._check()
        self.markers[handle].actions[name] = callback

    def on_click(self, callback: ClickCallback) -> None:
        self._check()
        self._click_handlers.append(callback)

    def set_view(self, lat: float, lng: float, zoom: int) -> None:
        self._check()
        self.view = (lat, lng, zoom)

    # --- Inspection and simulation ---

    def popup(self, handle: int) -> str | None:
        marker = self.markers.get(handle)
        return marker.popup if marker else None

    def positions(self) -> list[tuple[float, float]]:
        return [(m.lat, m.lng) for m in self.markers.values()]

    async def click(self, lat: float, lng: float) -> None:
        """Simulate a click on the map background."""
        for handler in list(self._click_handlers):
            await _maybe_await(handler(lat, lng))

    async def trigger(self, handle: int, name: str) -> Any:
        """Simulate use of a popup affordance, e.g. the delete button."""
        callback = self.markers[handle].actions[name]
        return await _maybe_await(callback())


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    # Let tasks scheduled by the handler start before returning.
    await asyncio.sleep(0)
    return result
