"""Terminal notifications for the command line.

Prints notifications through a Rich console, with errors going to stderr.

Example:
    >>> from balloonspine.notifier.console import ConsoleNotifier
    >>> notifier = ConsoleNotifier()
    >>> hasattr(notifier, "send")
    True
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from balloonspine.protocols.notification import Notification, Severity


class ConsoleNotifier:
    """Notifier that prints to the terminal.

    Best for: the command line, development.

    Args:
        min_severity: Quietest severity that is still printed.
        console: Destination for debug, info and warning messages.
        error_console: Destination for errors (default: stderr).
        show_tags: Append tags as #hashtags.

    Example:
        >>> import asyncio
        >>> from balloonspine.notifier.console import ConsoleNotifier
        >>> from balloonspine.protocols.notification import Notification, Severity
        >>> notifier = ConsoleNotifier(min_severity=Severity.WARNING)
        >>> asyncio.run(notifier.send(Notification(
        ...     title="Map centered",
        ...     message="Using default view",
        ...     severity=Severity.DEBUG,
        ... )))
        False
    """

    STYLES = {
        Severity.DEBUG: "dim",
        Severity.INFO: "cyan",
        Severity.WARNING: "yellow",
        Severity.ERROR: "bold red",
    }

    def __init__(
        self,
        min_severity: Severity = Severity.INFO,
        console: Console | None = None,
        error_console: Console | None = None,
        show_tags: bool = False,
    ) -> None:
        self._min_severity = min_severity
        self._console = console or Console()
        self._error_console = error_console or Console(stderr=True)
        self._show_tags = show_tags

    async def close(self) -> None:
        """No-op for console."""

    async def send(self, notification: Notification) -> bool:
        """Print a notification if it meets the severity threshold.

        Example:
            >>> import asyncio
            >>> import io
            >>> from rich.console import Console
            >>> out = io.StringIO()
            >>> notifier = ConsoleNotifier(console=Console(file=out))
            >>> asyncio.run(notifier.send(Notification(title="Saved", message="ok")))
            True
            >>> "Saved" in out.getvalue()
            True
        """
        if not self._should_display(notification.severity):
            return False

        console = self._error_console if notification.severity is Severity.ERROR else self._console
        console.print(self._format(notification))
        return True

    def _should_display(self, severity: Severity) -> bool:
        order = list(Severity)
        return order.index(severity) >= order.index(self._min_severity)

    def _format(self, notification: Notification) -> str:
        style = self.STYLES[notification.severity]
        text = f"[{style}]{escape(notification.title)}:[/{style}] {escape(notification.message)}"
        if self._show_tags and notification.tags:
            text += " (" + " ".join(f"#{escape(tag)}" for tag in notification.tags) + ")"
        return text
