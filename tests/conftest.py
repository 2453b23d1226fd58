"""Shared fixtures for BalloonSpine tests."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from balloonspine.core.tracker import SightingTracker
from balloonspine.models.sighting import SightingRecord
from balloonspine.persistence.memory import MemoryPersistence
from balloonspine.protocols.geocoder import AddressResult
from balloonspine.storage.record_store import RecordStore
from balloonspine.surface.memory import MemoryMapSurface
from balloonspine.sync.markers import MarkerSynchronizer


class FakeGeocoder:
    """Geocoder double with a configurable outcome.

    If ``gate`` is set, lookups wait for it, which lets tests delete a
    record while its enrichment is in flight.
    """

    def __init__(
        self,
        address: str = "10 Downing St, London",
        error: str | None = None,
        raises: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.address = address
        self.error = error
        self.raises = raises
        self.gate = gate
        self.calls: list[tuple[float, float]] = []
        self.closed = False

    async def resolve_address(self, lat: float, lng: float) -> AddressResult:
        self.calls.append((lat, lng))
        if self.gate is not None:
            await self.gate.wait()
        if self.raises is not None:
            raise self.raises
        if self.error is not None:
            return AddressResult.failure(self.error)
        return AddressResult.success(self.address)

    async def close(self) -> None:
        self.closed = True


def make_record(record_id: int = 1, **kwargs: object) -> SightingRecord:
    """Create a test record with sensible defaults."""
    values: dict[str, object] = {
        "lat": 51.505,
        "lng": -0.09,
        "notes": "test",
        "timestamp": datetime(2024, 5, 1, 14, 30, tzinfo=UTC),
    }
    values.update(kwargs)
    return SightingRecord(id=record_id, **values)


@pytest.fixture
def persistence() -> MemoryPersistence:
    return MemoryPersistence()


@pytest.fixture
def surface() -> MemoryMapSurface:
    return MemoryMapSurface()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def store(persistence: MemoryPersistence) -> RecordStore:
    return RecordStore(persistence)


@pytest.fixture
def synchronizer(surface: MemoryMapSurface) -> MarkerSynchronizer:
    return MarkerSynchronizer(surface, tz=UTC)


@pytest.fixture
def tracker(
    store: RecordStore,
    synchronizer: MarkerSynchronizer,
    geocoder: FakeGeocoder,
) -> SightingTracker:
    return SightingTracker(store, synchronizer, geocoder)


def assert_bijection(store: RecordStore, synchronizer: MarkerSynchronizer, surface: MemoryMapSurface) -> None:
    """Every live record has exactly one marker and vice versa."""
    assert sorted(synchronizer.marker_ids()) == sorted(store.ids())
    assert len(surface.markers) == store.count
    handles = [synchronizer.handle_for(i) for i in store.ids()]
    assert len(set(handles)) == len(handles)
    assert set(handles) == set(surface.markers)
