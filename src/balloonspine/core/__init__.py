"""Core configuration, errors and orchestration.

``SightingTracker`` and ``AppContext`` live in ``balloonspine.core.tracker``
and ``balloonspine.core.context``; they are re-exported from ``balloonspine``.
"""

from balloonspine.core.config import Settings, get_settings
from balloonspine.core.exceptions import (
    AttachmentEncodingError,
    BalloonSpineError,
    ConfigurationError,
    MapSurfaceUnavailableError,
    PersistenceUnavailableError,
    ValidationError,
)

__all__ = [
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
]
