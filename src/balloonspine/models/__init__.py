"""Domain models.

Example:
    >>> from balloonspine.models import SightingRecord, EnrichmentState
    >>> SightingRecord(id=1, lat=0.0, lng=0.0).enrichment_state is EnrichmentState.PENDING
    True
"""

from balloonspine.models.base import BalloonSpineModel
from balloonspine.models.sighting import (
    PENDING_ADDRESS,
    UNKNOWN_ADDRESS,
    EnrichmentState,
    SightingRecord,
)

__all__ = [
    "BalloonSpineModel",
    "EnrichmentState",
    "PENDING_ADDRESS",
    "SightingRecord",
    "UNKNOWN_ADDRESS",
]
