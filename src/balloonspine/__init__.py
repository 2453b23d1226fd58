"""
BalloonSpine - Sighting records on a map, kept in step with their markers.

Users mark sightings of balloon canisters on a map, attach notes and a photo,
and keep the records locally. Each record gets a human-readable address in the
background.

Key Features:
- Record store with a full snapshot written after every change
- Exactly one map marker per live sighting, rebuilt on load
- Background reverse geocoding that never blocks or breaks a submission
- Protocol-based collaborators (map surface, persistence, geocoder)

Quick Start:
    >>> from balloonspine import AppContext, MemoryMapSurface, MemoryPersistence
    >>> from balloonspine import NominatimGeocoder
    >>> async with AppContext(MemoryMapSurface(), MemoryPersistence(), NominatimGeocoder()) as ctx:
    ...     ctx.tracker.select_location(51.505, -0.09)
    ...     record = await ctx.tracker.submit(notes="Canister by the bench")

Architecture:
    Record store: RecordStore over MemoryPersistence or FilePersistence
    Map surfaces: MemoryMapSurface, FoliumMapSurface
    Geocoders: NominatimGeocoder
    Orchestration: SightingTracker, AppContext
"""

# Orchestration
from balloonspine.core.config import Settings, get_settings
from balloonspine.core.context import AppContext
from balloonspine.core.exceptions import (
    AttachmentEncodingError,
    BalloonSpineError,
    ConfigurationError,
    MapSurfaceUnavailableError,
    PersistenceUnavailableError,
    ValidationError,
)
from balloonspine.core.tracker import FormState, SightingTracker, TrackerStats

# Collaborators
from balloonspine.encoder.data_uri import DataUriEncoder
from balloonspine.geocoder.nominatim import NominatimGeocoder
from balloonspine.geolocation.static import StaticLocationProvider
from balloonspine.http.client import HttpClient, HttpClientError
from balloonspine.models.sighting import (
    PENDING_ADDRESS,
    UNKNOWN_ADDRESS,
    EnrichmentState,
    SightingRecord,
)
from balloonspine.notifier.console import ConsoleNotifier
from balloonspine.persistence.file import FilePersistence
from balloonspine.persistence.memory import MemoryPersistence
from balloonspine.protocols.geocoder import AddressResult, EnrichmentStatus
from balloonspine.protocols.notification import Notification, Severity
from balloonspine.storage.record_store import RecordStore
from balloonspine.surface.folium_map import FoliumMapSurface
from balloonspine.surface.memory import MemoryMapSurface
from balloonspine.sync.markers import MarkerSynchronizer
from balloonspine.sync.popup import render_popup

__version__ = "0.1.0"

__all__ = [
    # Orchestration
    "AppContext",
    "FormState",
    "SightingTracker",
    "TrackerStats",
    # Models
    "EnrichmentState",
    "PENDING_ADDRESS",
    "SightingRecord",
    "UNKNOWN_ADDRESS",
    # Store and view
    "MarkerSynchronizer",
    "RecordStore",
    "render_popup",
    # Persistence
    "FilePersistence",
    "MemoryPersistence",
    # Map surfaces
    "FoliumMapSurface",
    "MemoryMapSurface",
    # Geocoding
    "AddressResult",
    "EnrichmentStatus",
    "HttpClient",
    "HttpClientError",
    "NominatimGeocoder",
    # Attachments and location
    "DataUriEncoder",
    "StaticLocationProvider",
    # Notifications
    "ConsoleNotifier",
    "Notification",
    "Severity",
    # Config
    "Settings",
    "get_settings",
    # Errors
    "AttachmentEncodingError",
    "BalloonSpineError",
    "ConfigurationError",
    "MapSurfaceUnavailableError",
    "PersistenceUnavailableError",
    "ValidationError",
    # Version
    "__version__",
]
