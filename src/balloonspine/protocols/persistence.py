"""Persistence backend protocol.

Key-value string storage. The record store keeps one JSON array under a
single fixed key.

Example:
    >>> from balloonspine.protocols.persistence import PersistenceBackend
    >>> hasattr(PersistenceBackend, "get")
    True
    >>> hasattr(PersistenceBackend, "set")
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PersistenceBackend(Protocol):
    """Key-value string storage.

    Implementations raise ``PersistenceUnavailableError`` when the
    underlying medium cannot be read or written.

    See Also:
        balloonspine.persistence.memory.MemoryPersistence: In-memory implementation
        balloonspine.persistence.file.FilePersistence: JSON files on disk
    """

    async def get(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
