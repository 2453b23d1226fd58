"""AppContext - explicit wiring and startup for a sighting map.

All collaborators are passed in; nothing is global. Startup order is fixed:
load the snapshot, render it, bind map clicks, then center the map.

Example:
    >>> import asyncio
    >>> from balloonspine.core.context import AppContext
    >>> from balloonspine.persistence.memory import MemoryPersistence
    >>> from balloonspine.surface.memory import MemoryMapSurface
    >>> class NoGeocoder:
    ...     async def resolve_address(self, lat, lng):
    ...         from balloonspine.protocols.geocoder import AddressResult
    ...         return AddressResult.failure("offline")
    ...     async def close(self):
    ...         pass
    >>> async def example():
    ...     async with AppContext(MemoryMapSurface(), MemoryPersistence(), NoGeocoder()) as ctx:
    ...         return ctx.tracker.count
    >>> asyncio.run(example())
    0
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import TYPE_CHECKING

from balloonspine.core.config import Settings
from balloonspine.core.exceptions import MapSurfaceUnavailableError
from balloonspine.core.tracker import SightingTracker
from balloonspine.encoder.data_uri import DataUriEncoder
from balloonspine.geocoder.nominatim import NominatimGeocoder
from balloonspine.persistence.file import FilePersistence
from balloonspine.storage.record_store import RecordStore
from balloonspine.surface.folium_map import FoliumMapSurface
from balloonspine.sync.markers import MarkerSynchronizer

if TYPE_CHECKING:
    from balloonspine.protocols.encoder import AttachmentEncoder
    from balloonspine.protocols.geocoder import Geocoder
    from balloonspine.protocols.geolocation import GeolocationProvider
    from balloonspine.protocols.map_surface import MapSurface
    from balloonspine.protocols.notification import Notifier
    from balloonspine.protocols.persistence import PersistenceBackend

logger = logging.getLogger(__name__)


class AppContext:
    """Owns the store, synchronizer and tracker for one map.

    Args:
        surface: Map to render on. Required.
        persistence: Backend for the snapshot.
        geocoder: Address lookup for enrichment.
        encoder: Attachment encoder (default: ``DataUriEncoder``).
        geolocation: Optional provider for the initial map center.
        notifier: Optional user-visible status channel.
        settings: Keys, default view and limits.
        tz: Timezone for popup dates (default: local time).

    Raises:
        MapSurfaceUnavailableError: If ``surface`` is None.
    """

    def __init__(
        self,
        surface: MapSurface | None,
        persistence: PersistenceBackend,
        geocoder: Geocoder,
        *,
        encoder: AttachmentEncoder | None = None,
        geolocation: GeolocationProvider | None = None,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        if surface is None:
            raise MapSurfaceUnavailableError("A map surface is required")

        self.settings = settings or Settings()
        self.surface = surface
        self.geocoder = geocoder
        self.geolocation = geolocation
        self.notifier = notifier
        self.store = RecordStore(persistence, key=self.settings.storage_key)
        self.synchronizer = MarkerSynchronizer(surface, tz=tz)
        self.tracker = SightingTracker(
            self.store,
            self.synchronizer,
            geocoder,
            encoder=encoder or DataUriEncoder(max_bytes=self.settings.max_attachment_bytes),
            notifier=notifier,
        )
        self._started = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        surface: MapSurface | None = None,
        geocoder: Geocoder | None = None,
        geolocation: GeolocationProvider | None = None,
        notifier: Notifier | None = None,
    ) -> AppContext:
        """Build a context with file persistence and the Nominatim geocoder.

        Without an explicit surface, a ``FoliumMapSurface`` centered on the
        configured default view is used.
        """
        settings = settings or Settings()
        if surface is None:
            surface = FoliumMapSurface(
                center=(settings.default_lat, settings.default_lng),
                zoom=settings.default_zoom,
            )
        return cls(
            surface,
            FilePersistence(settings.storage_path),
            geocoder or NominatimGeocoder.from_settings(settings),
            geolocation=geolocation,
            notifier=notifier,
            settings=settings,
        )

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Load, render, bind events and center the map. Idempotent."""
        if self._started:
            return

        records = await self.store.load()
        self.tracker.observe_existing_ids()
        self.synchronizer.render_all(records)
        self.surface.on_click(self.tracker.select_location)
        await self._center_map()

        self._started = True
        logger.info("Sighting map ready with %d sightings", len(records))

    async def close(self) -> None:
        """Let enrichment finish, then release collaborators."""
        await self.tracker.wait_for_enrichment()
        await self.geocoder.close()
        if self.notifier is not None:
            await self.notifier.close()
        self._started = False

    async def __aenter__(self) -> AppContext:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _center_map(self) -> None:
        position = None
        if self.geolocation is not None:
            try:
                position = await self.geolocation.current_position()
            except Exception as e:
                logger.debug("Geolocation unavailable: %s", e)

        if position is not None:
            self.surface.set_view(position[0], position[1], self.settings.located_zoom)
        else:
            self.surface.set_view(
                self.settings.default_lat,
                self.settings.default_lng,
                self.settings.default_zoom,
            )
