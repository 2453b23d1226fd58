"""File-based persistence backend.

Stores each key as a JSON file in a directory.

Example:
    >>> import asyncio
    >>> import tempfile
    >>> from pathlib import Path
    >>> from balloonspine.persistence.file import FilePersistence
    >>> async def example():
    ...     with tempfile.TemporaryDirectory() as tmpdir:
    ...         backend = FilePersistence(Path(tmpdir))
    ...         await backend.set("balloonSightings", "[]")
    ...         return await backend.get("balloonSightings")
    >>> asyncio.run(example())
    '[]'
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import tempfile
from pathlib import Path

from balloonspine.core.exceptions import PersistenceUnavailableError

logger = logging.getLogger(__name__)


class FilePersistence:
    """Key-value storage on the local filesystem.

    Each write goes to a temporary file that is then renamed over the
    previous snapshot, so a crash mid-write never leaves a truncated file.

    Best for: Single-user local installs, the command line.
    """

    def __init__(self, directory: Path | str, create_dirs: bool = True) -> None:
        """Initialize file persistence.

        Args:
            directory: Directory holding one ``<key>.json`` file per key.
            create_dirs: Create the directory on first write if missing.
        """
        self._directory = Path(directory)
        self._create_dirs = create_dirs

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Get the file path for a key."""
        # Sanitize key for filename
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
        return self._directory / f"{safe_key}.json"

    async def get(self, key: str) -> str | None:
        """Read the value stored under key.

        Raises:
            PersistenceUnavailableError: If the file exists but cannot be read.
        """
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set(self, key: str, value: str) -> None:
        """Atomically replace the value stored under key.

        Raises:
            PersistenceUnavailableError: If the file cannot be written.
        """
        await asyncio.to_thread(self._write, self.path_for(key), value)

    def _read(self, path: Path) -> str | None:
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceUnavailableError(f"Cannot read {path}: {e}") from e

    def _write(self, path: Path, value: str) -> None:
        temp_path: Path | None = None
        try:
            if self._create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)
            # One temp file per write; concurrent writers never share it.
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}-",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(value)
            temp_path.replace(path)
        except OSError as e:
            if temp_path is not None:
                with contextlib.suppress(OSError):
                    temp_path.unlink(missing_ok=True)
            raise PersistenceUnavailableError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(value), path)
