"""Tests for ConsoleNotifier."""

from __future__ import annotations

import io

from rich.console import Console

from balloonspine.notifier.console import ConsoleNotifier
from balloonspine.protocols.notification import Notification, Notifier, Severity


def make_notifier(**kwargs) -> tuple[ConsoleNotifier, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    notifier = ConsoleNotifier(
        console=Console(file=out, width=200),
        error_console=Console(file=err, width=200),
        **kwargs,
    )
    return notifier, out, err


class TestConsoleNotifier:
    """Tests for ConsoleNotifier."""

    async def test_prints_info(self) -> None:
        """Info notifications go to the main console."""
        notifier, out, err = make_notifier()

        sent = await notifier.send(Notification(title="Sighting saved", message="at 51.505, -0.09"))

        assert sent is True
        assert "Sighting saved: at 51.505, -0.09" in out.getvalue()
        assert err.getvalue() == ""

    async def test_errors_go_to_error_console(self) -> None:
        """Errors are printed to the error console."""
        notifier, out, err = make_notifier()

        await notifier.send(
            Notification(title="Sighting not saved", message="disk full", severity=Severity.ERROR)
        )

        assert "Sighting not saved" in err.getvalue()
        assert out.getvalue() == ""

    async def test_min_severity_filters(self) -> None:
        """Notifications below the threshold are dropped."""
        notifier, out, _ = make_notifier(min_severity=Severity.WARNING)

        sent = await notifier.send(Notification(title="Saved", message="ok", severity=Severity.INFO))

        assert sent is False
        assert out.getvalue() == ""

    async def test_markup_in_message_is_literal(self) -> None:
        """User text with brackets is not treated as markup."""
        notifier, out, _ = make_notifier()

        await notifier.send(Notification(title="Note", message="[bold]canister[/bold]"))

        assert "[bold]canister[/bold]" in out.getvalue()

    async def test_shows_tags(self) -> None:
        """Tags are appended when enabled."""
        notifier, out, _ = make_notifier(show_tags=True)

        await notifier.send(Notification(title="Deleted", message="ok", tags=["sighting"]))

        assert "#sighting" in out.getvalue()

    async def test_implements_protocol(self) -> None:
        """ConsoleNotifier satisfies Notifier and closes cleanly."""
        notifier, _, _ = make_notifier()
        assert isinstance(notifier, Notifier)
        await notifier.close()
