"""Custom exceptions.

BalloonSpine uses a small hierarchy so callers can tell failures that abort
a submission from failures that are only reported:

Example:
    >>> from balloonspine.core.exceptions import (
    ...     BalloonSpineError, PersistenceUnavailableError,
    ... )
    >>> isinstance(PersistenceUnavailableError("disk full"), BalloonSpineError)
    True
    >>> try:
    ...     raise PersistenceUnavailableError("disk full")
    ... except BalloonSpineError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: PersistenceUnavailableError
"""

from __future__ import annotations


class BalloonSpineError(Exception):
    """Base exception for BalloonSpine.

    Example:
        >>> from balloonspine.core.exceptions import BalloonSpineError
        >>> str(BalloonSpineError("something went wrong"))
        'something went wrong'
    """


class AttachmentEncodingError(BalloonSpineError):
    """An attached photo could not be read or encoded.

    Aborts the submission; no record is created.

    Example:
        >>> from balloonspine.core.exceptions import AttachmentEncodingError
        >>> raise AttachmentEncodingError("photo.jpg unreadable")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        AttachmentEncodingError: photo.jpg unreadable
    """


class PersistenceUnavailableError(BalloonSpineError):
    """The persistence backend could not be read or written.

    Example:
        >>> from balloonspine.core.exceptions import PersistenceUnavailableError
        >>> raise PersistenceUnavailableError("read-only filesystem")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        PersistenceUnavailableError: read-only filesystem
    """


class MapSurfaceUnavailableError(BalloonSpineError):
    """No map surface to render on. Fatal at startup."""


class ValidationError(BalloonSpineError):
    """Data validation failed.

    Example:
        >>> from balloonspine.core.exceptions import ValidationError
        >>> raise ValidationError("invalid address")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ValidationError: invalid address
    """


class ConfigurationError(BalloonSpineError):
    """Configuration is invalid."""
