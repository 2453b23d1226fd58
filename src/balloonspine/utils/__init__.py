"""Utility helpers."""

from balloonspine.utils.ids import IdGenerator

__all__ = ["IdGenerator"]
