"""Record storage.

Example:
    >>> from balloonspine.storage import RecordStore
    >>> from balloonspine.persistence import MemoryPersistence
    >>> store = RecordStore(MemoryPersistence())
"""

from balloonspine.storage.record_store import DEFAULT_KEY, RecordStore

__all__ = ["DEFAULT_KEY", "RecordStore"]
