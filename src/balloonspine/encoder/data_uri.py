"""Data URI encoder for photo attachments.

Example:
    >>> import asyncio
    >>> import tempfile
    >>> from pathlib import Path
    >>> from balloonspine.encoder.data_uri import DataUriEncoder
    >>> with tempfile.TemporaryDirectory() as tmpdir:
    ...     path = Path(tmpdir) / "pixel.png"
    ...     _ = path.write_bytes(b"PNG")
    ...     asyncio.run(DataUriEncoder().encode(path))
    'data:image/png;base64,UE5H'
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from pathlib import Path

from balloonspine.core.exceptions import AttachmentEncodingError
from balloonspine.protocols.encoder import AttachmentSource

DEFAULT_MIME = "application/octet-stream"


class DataUriEncoder:
    """Reads a file off the event loop and returns it as a base64 data URI.

    Args:
        max_bytes: Largest accepted file; bigger files are rejected.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes

    async def encode(self, source: AttachmentSource) -> str:
        """Encode a file as ``data:<mime>;base64,<payload>``.

        Raises:
            AttachmentEncodingError: If the source is not a path, or the file
                cannot be read or is too large.
        """
        try:
            path = Path(source)
        except TypeError as e:
            raise AttachmentEncodingError(f"Not a file path: {source!r}") from e
        data = await asyncio.to_thread(self._read, path)
        mime = mimetypes.guess_type(path.name)[0] or DEFAULT_MIME
        payload = base64.b64encode(data).decode("ascii")
        return f"data:{mime};base64,{payload}"

    def _read(self, path: Path) -> bytes:
        try:
            if self._max_bytes is not None and path.stat().st_size > self._max_bytes:
                raise AttachmentEncodingError(
                    f"{path.name} is larger than {self._max_bytes} bytes"
                )
            return path.read_bytes()
        except OSError as e:
            raise AttachmentEncodingError(f"Cannot read {path}: {e}") from e
