"""Attachment encoders."""

from balloonspine.encoder.data_uri import DataUriEncoder

__all__ = ["DataUriEncoder"]
