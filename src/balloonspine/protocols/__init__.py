"""Protocol definitions - the collaborators the core consumes."""

from balloonspine.protocols.encoder import AttachmentEncoder, AttachmentSource
from balloonspine.protocols.geocoder import AddressResult, EnrichmentStatus, Geocoder
from balloonspine.protocols.geolocation import GeolocationProvider
from balloonspine.protocols.map_surface import (
    ActionCallback,
    ClickCallback,
    MapSurface,
    MarkerHandle,
)
from balloonspine.protocols.notification import Notification, Notifier, Severity
from balloonspine.protocols.persistence import PersistenceBackend

__all__ = [
    # Persistence
    "PersistenceBackend",
    # Map
    "MapSurface",
    "MarkerHandle",
    "ClickCallback",
    "ActionCallback",
    # Geocoding
    "Geocoder",
    "AddressResult",
    "EnrichmentStatus",
    # Attachments
    "AttachmentEncoder",
    "AttachmentSource",
    # Geolocation
    "GeolocationProvider",
    # Notification
    "Notification",
    "Notifier",
    "Severity",
]
