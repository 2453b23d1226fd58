"""Persistence backend implementations.

Example:
    >>> from balloonspine.persistence import FilePersistence, MemoryPersistence
    >>> backend = MemoryPersistence()
"""

from balloonspine.persistence.file import FilePersistence
from balloonspine.persistence.memory import MemoryPersistence

__all__ = ["FilePersistence", "MemoryPersistence"]
