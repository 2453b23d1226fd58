"""Sighting record model.

A sighting is one reported observation: a point on the map, optional notes
and photo, and an address that is resolved in the background.

Example:
    >>> from balloonspine.models.sighting import SightingRecord, PENDING_ADDRESS
    >>> s = SightingRecord(id=1, lat=51.505, lng=-0.09, notes="test")
    >>> s.address == PENDING_ADDRESS
    True
    >>> s.enrichment_state.value
    'pending'
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from balloonspine.models.base import BalloonSpineModel

PENDING_ADDRESS = "Loading..."
UNKNOWN_ADDRESS = "Unknown location"


class EnrichmentState(str, Enum):
    """Where a record is in its address enrichment.

    Example:
        >>> EnrichmentState.RESOLVED.value
        'resolved'
    """

    PENDING = "pending"
    RESOLVED = "resolved"  # Terminal
    FAILED = "failed"  # Terminal, address is UNKNOWN_ADDRESS


class SightingRecord(BalloonSpineModel):
    """One persisted sighting.

    Everything except ``address`` is frozen once the record exists.
    ``address`` starts at the pending sentinel and moves once to a
    terminal value.

    Example:
        >>> s = SightingRecord(id=1, lat=10.0, lng=20.0)
        >>> s.lat = 11.0  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        pydantic_core._pydantic_core.ValidationError: ...
    """

    id: int = Field(..., frozen=True, description="Time-derived identifier")
    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False, frozen=True)
    lng: float = Field(..., allow_inf_nan=False, frozen=True)
    notes: str = Field(default="", frozen=True)
    image: str | None = Field(default=None, frozen=True, description="Photo as a data URI")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="timestamp",
        frozen=True,
    )
    address: str = Field(default=PENDING_ADDRESS)

    @field_validator("notes", mode="before")
    @classmethod
    def _none_notes(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("image", mode="before")
    @classmethod
    def _empty_image(cls, value: Any) -> Any:
        return value or None

    @field_validator("created_at")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def enrichment_state(self) -> EnrichmentState:
        """Enrichment progress derived from the address value."""
        if self.address == PENDING_ADDRESS:
            return EnrichmentState.PENDING
        if self.address == UNKNOWN_ADDRESS:
            return EnrichmentState.FAILED
        return EnrichmentState.RESOLVED

    @property
    def is_pending(self) -> bool:
        return self.enrichment_state is EnrichmentState.PENDING

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize to the persisted JSON element.

        Example:
            >>> s = SightingRecord(id=7, lat=1.0, lng=2.0)
            >>> sorted(s.to_snapshot())
            ['address', 'id', 'image', 'lat', 'lng', 'notes', 'timestamp']
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> SightingRecord:
        """Build a record from a persisted element.

        Missing optional fields fall back to defaults; a record loaded
        without an address is treated as unresolved rather than pending,
        since nothing will enrich it again.

        Raises:
            pydantic.ValidationError: If id, lat or lng are missing or invalid.
        """
        payload = dict(data)
        if payload.get("address") in (None, ""):
            payload["address"] = UNKNOWN_ADDRESS
        if payload.get("timestamp") is None:
            payload.pop("timestamp", None)
        return cls.model_validate(payload)
