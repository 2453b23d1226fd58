"""Map surface implementations.

Example:
    >>> from balloonspine.surface import MemoryMapSurface
    >>> surface = MemoryMapSurface()
"""

from balloonspine.surface.folium_map import FoliumMapSurface
from balloonspine.surface.memory import MemoryMapSurface, MemoryMarker

__all__ = ["FoliumMapSurface", "MemoryMapSurface", "MemoryMarker"]
