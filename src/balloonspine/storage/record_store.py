"""Record store - the authoritative sighting collection.

The store keeps sightings in insertion order and writes the whole collection
to the persistence backend after every mutation. There is no incremental
format: the snapshot is one JSON array under a fixed key.

Example:
    >>> import asyncio
    >>> from balloonspine.models import SightingRecord
    >>> from balloonspine.persistence.memory import MemoryPersistence
    >>> from balloonspine.storage.record_store import RecordStore
    >>> async def example():
    ...     store = RecordStore(MemoryPersistence())
    ...     await store.add(SightingRecord(id=1, lat=51.5, lng=-0.09))
    ...     reloaded = RecordStore(store.backend)
    ...     return [r.id for r in await reloaded.load()]
    >>> asyncio.run(example())
    [1]
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable, Iterator

import pydantic

from balloonspine.core.exceptions import PersistenceUnavailableError, ValidationError
from balloonspine.models.sighting import PENDING_ADDRESS, SightingRecord
from balloonspine.protocols.persistence import PersistenceBackend

logger = logging.getLogger(__name__)

DEFAULT_KEY = "balloonSightings"


class RecordStore:
    """Ordered, id-keyed collection of sightings backed by a snapshot.

    Mutations update memory first and then write the full snapshot. If the
    write fails, ``add`` rolls back (the record never existed) while
    ``remove`` and ``update_address`` keep the in-memory change so the
    session stays usable; all three raise ``PersistenceUnavailableError``.

    Example:
        >>> from balloonspine.persistence.memory import MemoryPersistence
        >>> store = RecordStore(MemoryPersistence(), key="test")
        >>> store.count
        0
    """

    def __init__(self, backend: PersistenceBackend, key: str = DEFAULT_KEY) -> None:
        self._backend = backend
        self._key = key
        self._records: dict[int, SightingRecord] = {}
        self._save_lock = asyncio.Lock()

    @property
    def backend(self) -> PersistenceBackend:
        return self._backend

    @property
    def key(self) -> str:
        return self._key

    @property
    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[SightingRecord]:
        return iter(list(self._records.values()))

    def get(self, record_id: int) -> SightingRecord | None:
        return self._records.get(record_id)

    def list(self) -> list[SightingRecord]:
        """Live records in insertion order."""
        return list(self._records.values())

    def ids(self) -> list[int]:
        return list(self._records)

    # --- Persistence ---

    async def load(self) -> list[SightingRecord]:
        """Replace the in-memory collection with the persisted snapshot.

        A missing, unreadable or corrupt snapshot yields no records. Elements
        that cannot be turned into a record are skipped individually.

        Returns:
            The loaded records, in persisted order.
        """
        self._records = {}
        try:
            raw = await self._backend.get(self._key)
        except PersistenceUnavailableError as e:
            logger.warning("Snapshot %r unavailable, starting empty: %s", self._key, e)
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Snapshot %r is corrupt, starting empty: %s", self._key, e)
            return []
        if not isinstance(data, list):
            logger.warning("Snapshot %r is not a JSON array, starting empty", self._key)
            return []

        for index, element in enumerate(data):
            if not isinstance(element, dict):
                logger.warning("Skipping snapshot element %d: not an object", index)
                continue
            try:
                record = SightingRecord.from_snapshot(element)
            except pydantic.ValidationError as e:
                logger.warning("Skipping snapshot element %d: %s", index, e.errors()[0]["msg"])
                continue
            if record.id in self._records:
                logger.warning("Skipping snapshot element %d: duplicate id %d", index, record.id)
                continue
            self._records[record.id] = record

        logger.debug("Loaded %d sightings from %r", len(self._records), self._key)
        return self.list()

    async def save_all(self, records: Iterable[SightingRecord] | None = None) -> None:
        """Write the full collection, replacing the previous snapshot.

        Args:
            records: Records to write. Defaults to the live collection.

        Raises:
            PersistenceUnavailableError: If the backend rejects the write.
        """
        # Snapshots are taken and written in call order, so the newest
        # state is always the last one on disk.
        async with self._save_lock:
            items = self.list() if records is None else list(records)
            payload = json.dumps([r.to_snapshot() for r in items])
            await self._backend.set(self._key, payload)

    # --- Mutations ---

    async def add(self, record: SightingRecord) -> bool:
        """Append a record and persist.

        Returns:
            False (and nothing is written) if the id already exists.

        Raises:
            PersistenceUnavailableError: If the write fails; the record is
                not kept.
        """
        if record.id in self._records:
            logger.debug("Ignoring duplicate sighting id %d", record.id)
            return False

        self._records[record.id] = record
        try:
            await self.save_all()
        except PersistenceUnavailableError:
            del self._records[record.id]
            raise
        return True

    async def remove(self, record_id: int) -> bool:
        """Remove a record if present and persist.

        Returns:
            True if the record existed. Nothing is written otherwise.

        Raises:
            PersistenceUnavailableError: If the write fails; the record stays
                removed from memory.
        """
        if self._records.pop(record_id, None) is None:
            return False
        await self.save_all()
        return True

    async def update_address(self, record_id: int, address: str) -> SightingRecord | None:
        """Set the resolved address of a pending record and persist.

        Returns:
            The updated record, or None if the record was deleted meanwhile
            or its address is already final.

        Raises:
            ValidationError: If ``address`` is the pending sentinel.
        """
        if address == PENDING_ADDRESS:
            raise ValidationError("address cannot be reset to pending")

        record = self._records.get(record_id)
        if record is None:
            logger.debug("Discarding address for deleted sighting %d", record_id)
            return None
        if not record.is_pending:
            logger.debug("Sighting %d already has a final address", record_id)
            return None

        record.address = address
        await self.save_all()
        return record
