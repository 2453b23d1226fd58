"""Notification protocol.

Notifications are the user-visible, non-blocking status channel: rejected
submissions, storage problems, deletions.

Example:
    >>> from balloonspine.protocols.notification import Notification, Severity
    >>> n = Notification(
    ...     title="Sighting saved",
    ...     message="Marker added at 51.505, -0.09",
    ...     severity=Severity.INFO,
    ... )
    >>> n.severity.value
    'info'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class Severity(str, Enum):
    """Notification severity level, lowest first.

    Example:
        >>> from balloonspine.protocols.notification import Severity
        >>> Severity.WARNING.value
        'warning'
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """A message for the user.

    Example:
        >>> n = Notification(
        ...     title="Attachment rejected",
        ...     message="photo.jpg could not be read",
        ...     severity=Severity.ERROR,
        ...     tags=["attachment"],
        ... )
        >>> n.record_id is None
        True
    """

    title: str
    message: str
    severity: Severity = Severity.INFO
    record_id: int | None = None
    tags: list[str] = field(default_factory=list)


@runtime_checkable
class Notifier(Protocol):
    """Notification backend protocol."""

    async def send(self, notification: Notification) -> bool:
        """Send a notification. Returns True if it was shown."""
        ...

    async def close(self) -> None:
        """Clean up resources."""
        ...
