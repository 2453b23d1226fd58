"""Folium map surface - exports the sighting map as a Leaflet HTML page.

The surface keeps markers in memory and builds a ``folium.Map`` on demand,
so re-binding a popup never leaves a stale copy in the page.

Example:
    >>> from balloonspine.surface.folium_map import FoliumMapSurface
    >>> surface = FoliumMapSurface(center=(51.505, -0.09))
    >>> handle = surface.add_marker(51.505, -0.09)
    >>> surface.bind_popup(handle, "<p>Sighting</p>")
    >>> fmap = surface.build()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import folium

from balloonspine.protocols.map_surface import ActionCallback, ClickCallback

logger = logging.getLogger(__name__)

OSM_ATTRIBUTION = "&copy; OpenStreetMap contributors"


@dataclass
class _Placed:
    lat: float
    lng: float
    popup: str | None = None


class FoliumMapSurface:
    """Static HTML map.

    The exported page is not connected back to Python, so click handlers
    and popup actions are accepted but never fire.

    Args:
        center: Initial ``(lat, lng)`` of the view.
        zoom: Initial zoom level.
        tiles: Folium tile set name.
        popup_width: Maximum popup width in pixels.
    """

    def __init__(
        self,
        center: tuple[float, float] = (51.505, -0.09),
        zoom: int = 13,
        tiles: str = "OpenStreetMap",
        popup_width: int = 280,
    ) -> None:
        self._center = center
        self._zoom = zoom
        self._tiles = tiles
        self._popup_width = popup_width
        self._markers: dict[int, _Placed] = {}
        self._next_handle = 1

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    def add_marker(self, lat: float, lng: float) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._markers[handle] = _Placed(lat=lat, lng=lng)
        return handle

    def remove_marker(self, handle: int) -> None:
        self._markers.pop(handle, None)

    def bind_popup(self, handle: int, html: str) -> None:
        self._markers[handle].popup = html

    def bind_action(self, handle: int, name: str, callback: ActionCallback) -> None:
        logger.debug("Popup action %r on marker %d is not interactive in HTML export", name, handle)

    def on_click(self, callback: ClickCallback) -> None:
        logger.debug("Map clicks are not interactive in HTML export")

    def set_view(self, lat: float, lng: float, zoom: int) -> None:
        self._center = (lat, lng)
        self._zoom = zoom

    def build(self) -> folium.Map:
        """Create a folium map holding the current markers."""
        fmap = folium.Map(
            location=list(self._center),
            zoom_start=self._zoom,
            tiles=self._tiles,
            attr=OSM_ATTRIBUTION,
        )
        for placed in self._markers.values():
            popup = folium.Popup(placed.popup, max_width=self._popup_width) if placed.popup else None
            folium.Marker(location=[placed.lat, placed.lng], popup=popup).add_to(fmap)
        return fmap

    def save(self, path: Path | str) -> Path:
        """Write the map as a standalone HTML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.build().save(str(path))
        logger.info("Wrote map with %d markers to %s", len(self._markers), path)
        return path
