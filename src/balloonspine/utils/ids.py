"""Time-derived record identifiers.

Ids are milliseconds since the Unix epoch, bumped by one whenever the clock
has not moved past the last id handed out. Two submissions in the same
millisecond therefore still get distinct, increasing ids.

Example:
    >>> from balloonspine.utils.ids import IdGenerator
    >>> gen = IdGenerator(clock=lambda: 1_700_000_000.0)
    >>> gen.next_id(), gen.next_id()
    (1700000000000, 1700000000001)
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable


class IdGenerator:
    """Monotonic millisecond id source."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def observe(self, ids: Iterable[int]) -> None:
        """Never hand out an id at or below any of ``ids``.

        Called after loading a snapshot so a clock that went backwards
        cannot collide with persisted records.
        """
        for existing in ids:
            if existing > self._last:
                self._last = existing
