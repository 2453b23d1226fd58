"""Attachment encoder protocol."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

AttachmentSource = str | Path


@runtime_checkable
class AttachmentEncoder(Protocol):
    """Turns an attached file into a storable string (a data URI)."""

    async def encode(self, source: AttachmentSource) -> str:
        """Read and encode the attachment.

        Raises:
            AttachmentEncodingError: If the file cannot be read or encoded.
        """
        ...
