"""Map surface protocol.

The map surface is the rendering target: it places markers, shows popups and
reports clicks. Coordinates are WGS-84 degrees.

Example:
    >>> from balloonspine.protocols.map_surface import MapSurface
    >>> hasattr(MapSurface, "add_marker")
    True
    >>> hasattr(MapSurface, "bind_popup")
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

#: Opaque handle returned by ``add_marker``; only the surface interprets it.
MarkerHandle = Any

ClickCallback = Callable[[float, float], Any]
ActionCallback = Callable[[], Any]


@runtime_checkable
class MapSurface(Protocol):
    """Map rendering capabilities consumed by the marker synchronizer.

    Callbacks may be plain functions or coroutine functions; surfaces that
    run an event loop schedule coroutine results on it.

    See Also:
        balloonspine.surface.memory.MemoryMapSurface: In-memory implementation
        balloonspine.surface.folium_map.FoliumMapSurface: HTML export via folium
    """

    def add_marker(self, lat: float, lng: float) -> MarkerHandle:
        """Place a marker and return its handle."""
        ...

    def remove_marker(self, handle: MarkerHandle) -> None:
        """Detach a marker from the map."""
        ...

    def bind_popup(self, handle: MarkerHandle, html: str) -> None:
        """Attach (or replace) the popup content of a marker."""
        ...

    def bind_action(self, handle: MarkerHandle, name: str, callback: ActionCallback) -> None:
        """Register a handler for a named popup affordance (e.g. ``delete``)."""
        ...

    def on_click(self, callback: ClickCallback) -> None:
        """Register the handler for clicks on the map background."""
        ...

    def set_view(self, lat: float, lng: float, zoom: int) -> None:
        """Center the map."""
        ...
