"""In-memory persistence backend for testing.

Example:
    >>> import asyncio
    >>> from balloonspine.persistence.memory import MemoryPersistence
    >>> backend = MemoryPersistence()
    >>> asyncio.run(backend.set("k", "[]"))
    >>> asyncio.run(backend.get("k"))
    '[]'
"""

from __future__ import annotations

from balloonspine.core.exceptions import PersistenceUnavailableError


class MemoryPersistence:
    """Dictionary-backed key-value storage.

    Data is lost when the process exits. ``available`` can be switched off to
    simulate a backend that rejects every read and write.

    Best for: Testing, development.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.available = True
        self.writes = 0

    async def get(self, key: str) -> str | None:
        """Get a value by key."""
        self._check()
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        self._check()
        self._data[key] = value
        self.writes += 1

    def _check(self) -> None:
        if not self.available:
            raise PersistenceUnavailableError("memory persistence is unavailable")
