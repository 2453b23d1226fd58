"""Marker synchronizer.

Keeps exactly one map marker per live sighting. Markers are disposable view
objects: they are created from records, re-bound when a record's address
changes, and dropped with the record.

Example:
    >>> from balloonspine.models import SightingRecord
    >>> from balloonspine.surface.memory import MemoryMapSurface
    >>> from balloonspine.sync.markers import MarkerSynchronizer
    >>> surface = MemoryMapSurface()
    >>> sync = MarkerSynchronizer(surface)
    >>> sync.render_all([SightingRecord(id=1, lat=1.0, lng=2.0)])
    >>> sync.marker_ids(), len(surface.markers)
    ([1], 1)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import tzinfo
from typing import Any

from balloonspine.models.sighting import SightingRecord
from balloonspine.protocols.map_surface import MapSurface, MarkerHandle
from balloonspine.sync.popup import DELETE_ACTION, render_popup

logger = logging.getLogger(__name__)

DeleteHandler = Callable[[int], Any]


class MarkerSynchronizer:
    """One-to-one mapping from sighting ids to map markers.

    The synchronizer has no persistence of its own. Map surface errors are
    not caught: without a working surface there is no valid view to keep.

    Args:
        surface: The map to draw on.
        on_delete: Called with the record id when a marker's delete
            affordance is used. Each marker gets its own bound handler.
        tz: Timezone for popup dates (default: local time).
    """

    def __init__(
        self,
        surface: MapSurface,
        on_delete: DeleteHandler | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self._surface = surface
        self._on_delete = on_delete
        self._tz = tz
        self._markers: dict[int, MarkerHandle] = {}

    @property
    def surface(self) -> MapSurface:
        return self._surface

    def set_delete_handler(self, on_delete: DeleteHandler | None) -> None:
        """Replace the delete handler for markers rendered from now on."""
        self._on_delete = on_delete

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._markers

    def marker_ids(self) -> list[int]:
        """Ids of records that currently have a marker, in render order."""
        return list(self._markers)

    def handle_for(self, record_id: int) -> MarkerHandle | None:
        return self._markers.get(record_id)

    def render_all(self, records: Iterable[SightingRecord]) -> None:
        """Rebuild every marker from ``records``, in order."""
        self.remove_all()
        for record in records:
            self.render_one(record)
        logger.debug("Rendered %d markers", len(self._markers))

    def render_one(self, record: SightingRecord) -> MarkerHandle:
        """Add the marker for a new record.

        Raises:
            ValueError: If the record already has a marker.
        """
        if record.id in self._markers:
            raise ValueError(f"Sighting {record.id} already has a marker")

        handle = self._surface.add_marker(record.lat, record.lng)
        self._markers[record.id] = handle
        try:
            self._surface.bind_popup(handle, render_popup(record, self._tz))
            if self._on_delete is not None:
                self._surface.bind_action(handle, DELETE_ACTION, self._delete_callback(record.id))
        except Exception:
            self.remove_one(record.id)
            raise
        return handle

    def remove_one(self, record_id: int) -> bool:
        """Remove a single record's marker. Returns True if one existed."""
        handle = self._markers.pop(record_id, None)
        if handle is None:
            return False
        self._surface.remove_marker(handle)
        return True

    def remove_all(self) -> None:
        """Detach every marker and forget them."""
        while self._markers:
            _, handle = self._markers.popitem()
            self._surface.remove_marker(handle)

    def refresh_popup(self, record: SightingRecord) -> bool:
        """Re-bind a marker's popup from the record's current fields.

        Returns:
            False if the record has no marker (e.g. it was deleted).
        """
        handle = self._markers.get(record.id)
        if handle is None:
            return False
        self._surface.bind_popup(handle, render_popup(record, self._tz))
        return True

    def _delete_callback(self, record_id: int) -> Callable[[], Any]:
        on_delete = self._on_delete

        def callback() -> Any:
            return on_delete(record_id) if on_delete is not None else None

        return callback
