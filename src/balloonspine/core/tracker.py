"""SightingTracker - the sighting lifecycle controller.

The tracker turns user interaction into records:

    select_location -> (attach_image) -> submit -> persisted and rendered
        -> background enrichment -> address resolved or unknown

and removes records on request. Persistence and rendering of a new record
always finish before its enrichment is dispatched; a deletion that lands
while enrichment is in flight wins, and the late address is discarded.

Example:
    >>> import asyncio
    >>> from balloonspine.core.tracker import SightingTracker
    >>> from balloonspine.persistence.memory import MemoryPersistence
    >>> from balloonspine.protocols.geocoder import AddressResult
    >>> from balloonspine.storage.record_store import RecordStore
    >>> from balloonspine.surface.memory import MemoryMapSurface
    >>> from balloonspine.sync.markers import MarkerSynchronizer
    >>> class Fixed:
    ...     async def resolve_address(self, lat, lng):
    ...         return AddressResult.success("Somewhere")
    ...     async def close(self):
    ...         pass
    >>> async def example():
    ...     tracker = SightingTracker(
    ...         RecordStore(MemoryPersistence()),
    ...         MarkerSynchronizer(MemoryMapSurface()),
    ...         Fixed(),
    ...     )
    ...     tracker.select_location(51.505, -0.09)
    ...     record = await tracker.submit(notes="test")
    ...     await tracker.wait_for_enrichment()
    ...     return record.address
    >>> asyncio.run(example())
    'Somewhere'
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING

from balloonspine.core.exceptions import PersistenceUnavailableError, ValidationError
from balloonspine.encoder.data_uri import DataUriEncoder
from balloonspine.models.sighting import UNKNOWN_ADDRESS, EnrichmentState, SightingRecord
from balloonspine.protocols.geocoder import AddressResult
from balloonspine.protocols.notification import Notification, Severity
from balloonspine.utils.ids import IdGenerator

if TYPE_CHECKING:
    from balloonspine.protocols.encoder import AttachmentEncoder, AttachmentSource
    from balloonspine.protocols.geocoder import Geocoder
    from balloonspine.protocols.notification import Notifier
    from balloonspine.storage.record_store import RecordStore
    from balloonspine.sync.markers import MarkerSynchronizer

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    """State of the sighting form.

    Example:
        >>> FormState.IDLE.value
        'idle'
    """

    IDLE = "idle"
    AWAITING_FORM_INPUT = "awaiting_form_input"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class TrackerStats:
    """Counts shown next to the map.

    Example:
        >>> TrackerStats(total=2, pending=1, resolved=1, failed=0).total
        2
    """

    total: int = 0
    pending: int = 0
    resolved: int = 0
    failed: int = 0


StatsListener = Callable[[TrackerStats], None]


class SightingTracker:
    """Orchestrates the create, enrich and delete flow for sightings.

    Args:
        store: Authoritative record collection.
        synchronizer: Marker view kept in step with ``store``.
        geocoder: Resolves addresses in the background.
        encoder: Turns attachments into data URIs (default: ``DataUriEncoder``).
        notifier: Optional user-visible status channel.
        id_generator: Source of record ids.
        now: Clock for ``created_at``.
    """

    def __init__(
        self,
        store: RecordStore,
        synchronizer: MarkerSynchronizer,
        geocoder: Geocoder,
        encoder: AttachmentEncoder | None = None,
        notifier: Notifier | None = None,
        id_generator: IdGenerator | None = None,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._store = store
        self._sync = synchronizer
        self._geocoder = geocoder
        self._encoder = encoder or DataUriEncoder()
        self._notifier = notifier
        self._ids = id_generator or IdGenerator()
        self._now = now

        self._state = FormState.IDLE
        self._pending_location: tuple[float, float] | None = None
        self._pending_attachment: AttachmentSource | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._stats_listeners: list[StatsListener] = []

        self._sync.set_delete_handler(self.delete)

    # --- Read side ---

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def pending_location(self) -> tuple[float, float] | None:
        return self._pending_location

    @property
    def pending_attachment(self) -> AttachmentSource | None:
        return self._pending_attachment

    @property
    def count(self) -> int:
        return self._store.count

    @property
    def enrichment_in_flight(self) -> int:
        return len(self._tasks)

    def stats(self) -> TrackerStats:
        states = [r.enrichment_state for r in self._store.list()]
        return TrackerStats(
            total=len(states),
            pending=states.count(EnrichmentState.PENDING),
            resolved=states.count(EnrichmentState.RESOLVED),
            failed=states.count(EnrichmentState.FAILED),
        )

    def add_stats_listener(self, listener: StatsListener) -> None:
        """Call ``listener`` with fresh stats whenever the record set changes."""
        self._stats_listeners.append(listener)

    def observe_existing_ids(self) -> None:
        """Keep new ids above every id already in the store."""
        self._ids.observe(self._store.ids())

    # --- Form flow ---

    def select_location(self, lat: float, lng: float) -> None:
        """Capture the point the user chose; opens the form.

        Raises:
            ValidationError: If the coordinate is not a finite WGS-84 point.
        """
        if self._state is FormState.SUBMITTING:
            logger.debug("Ignoring location selection during submission")
            return
        if not (math.isfinite(lat) and math.isfinite(lng)) or not -90.0 <= lat <= 90.0:
            raise ValidationError(f"Invalid coordinate: {lat}, {lng}")
        self._pending_location = (lat, lng)
        self._state = FormState.AWAITING_FORM_INPUT

    def attach_image(self, source: AttachmentSource | None) -> None:
        """Select (or clear) the photo for the open form."""
        if self._state is not FormState.AWAITING_FORM_INPUT:
            raise ValidationError("No sighting form is open")
        self._pending_attachment = source

    def cancel(self) -> None:
        """Close the form, discarding the location and attachment."""
        if self._state is FormState.SUBMITTING:
            logger.debug("Cannot cancel while submitting")
            return
        self._reset_form()

    async def submit(self, notes: str = "") -> SightingRecord | None:
        """Create, persist and render a sighting from the open form.

        Returns:
            The new record, or None if no location was selected.

        Raises:
            AttachmentEncodingError: The photo could not be encoded.
            PersistenceUnavailableError: The record could not be saved.
            Exception: Whatever the encoder or map surface raised.

        On any of these no record exists afterwards and the form stays open.
        """
        if self._state is FormState.SUBMITTING or self._pending_location is None:
            return None

        lat, lng = self._pending_location
        self._state = FormState.SUBMITTING
        try:
            record = await self._create_sighting(lat, lng, notes)
        except BaseException:
            if self._state is FormState.SUBMITTING:
                self._state = FormState.AWAITING_FORM_INPUT
            raise

        logger.info("Sighting %d recorded at %.5f, %.5f", record.id, lat, lng)
        self._reset_form()
        self._emit_stats()
        self._dispatch_enrichment(record)
        return record

    async def _create_sighting(self, lat: float, lng: float, notes: str) -> SightingRecord:
        image = None
        if self._pending_attachment is not None:
            try:
                image = await self._encoder.encode(self._pending_attachment)
            except Exception as e:
                await self._notify("Attachment rejected", str(e), Severity.ERROR)
                raise

        record = SightingRecord(
            id=self._ids.next_id(),
            lat=lat,
            lng=lng,
            notes=notes,
            image=image,
            timestamp=self._now(),
        )

        try:
            await self._store.add(record)
        except PersistenceUnavailableError as e:
            await self._notify("Sighting not saved", str(e), Severity.ERROR)
            raise

        try:
            self._sync.render_one(record)
        except Exception as e:
            await self._rollback(record.id)
            await self._notify("Sighting not shown", str(e), Severity.ERROR)
            raise
        return record

    # --- Deletion ---

    async def delete(self, record_id: int) -> bool:
        """Remove a sighting and its marker.

        A failed snapshot write is reported but the sighting is still gone
        from this session.

        Returns:
            True if the sighting existed.
        """
        existed = record_id in self._store
        try:
            await self._store.remove(record_id)
        except PersistenceUnavailableError as e:
            logger.warning("Deletion of sighting %d not persisted: %s", record_id, e)
            await self._notify(
                "Deletion not saved",
                f"Sighting {record_id} will reappear after reload: {e}",
                Severity.WARNING,
                record_id,
            )
        self._sync.remove_one(record_id)

        if existed:
            logger.info("Sighting %d deleted", record_id)
            self._emit_stats()
        return existed

    # --- Enrichment ---

    async def wait_for_enrichment(self) -> None:
        """Wait until every in-flight enrichment has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _dispatch_enrichment(self, record: SightingRecord) -> None:
        task = asyncio.create_task(self._enrich(record.id, record.lat, record.lng))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _enrich(self, record_id: int, lat: float, lng: float) -> None:
        try:
            await self._apply_enrichment(record_id, await self._lookup(lat, lng))
        except Exception:
            logger.exception("Enrichment of sighting %d failed", record_id)

    async def _lookup(self, lat: float, lng: float) -> AddressResult:
        try:
            return await self._geocoder.resolve_address(lat, lng)
        except Exception as e:
            return AddressResult.failure(f"{type(e).__name__}: {e}")

    async def _apply_enrichment(self, record_id: int, result: AddressResult) -> None:
        address = result.address if result.ok and result.address else UNKNOWN_ADDRESS
        if not result.ok:
            logger.warning("No address for sighting %d: %s", record_id, result.error_message)

        try:
            updated = await self._store.update_address(record_id, address)
        except PersistenceUnavailableError as e:
            logger.warning("Address of sighting %d not persisted: %s", record_id, e)
            updated = self._store.get(record_id)

        if updated is None:
            return
        self._sync.refresh_popup(updated)
        self._emit_stats()

    # --- Helpers ---

    async def _rollback(self, record_id: int) -> None:
        try:
            await self._store.remove(record_id)
        except PersistenceUnavailableError as e:
            logger.warning("Rollback of sighting %d not persisted: %s", record_id, e)

    def _reset_form(self) -> None:
        self._pending_location = None
        self._pending_attachment = None
        self._state = FormState.IDLE

    def _emit_stats(self) -> None:
        stats = self.stats()
        for listener in list(self._stats_listeners):
            listener(stats)

    async def _notify(
        self,
        title: str,
        message: str,
        severity: Severity,
        record_id: int | None = None,
    ) -> None:
        if self._notifier is None:
            return
        try:
            await self._notifier.send(
                Notification(title=title, message=message, severity=severity, record_id=record_id)
            )
        except Exception:
            logger.exception("Notifier failed to deliver %r", title)
