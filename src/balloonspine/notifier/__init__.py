"""Notifier implementations."""

from balloonspine.notifier.console import ConsoleNotifier

__all__ = ["ConsoleNotifier"]
