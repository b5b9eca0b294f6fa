"""On-disk cache for icon files fetched from a remote icon server.

Entries are keyed by the server's base URL plus the icon's resource path,
hashed to a safe filename.  Only useful for a remote server: the bundled
local server already reads straight from disk, and its port changes on
every launch.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from loguru import logger

from .paths import SVG_CACHE_DIR, atomic_write


class SvgCache:
    """File-system cache mapping resource paths of one server to raw bytes."""

    def __init__(self, server_url: str, directory: Path | None = None) -> None:
        self.server_url = server_url.rstrip("/")
        self.directory = Path(directory) if directory is not None else SVG_CACHE_DIR

    def path_for(self, resource_path: str) -> Path:
        """Return the cache file for *resource_path* (SHA-256 of the full URL)."""
        h = hashlib.sha256((self.server_url + resource_path).encode()).hexdigest()
        return self.directory / f"{h}.svg"

    def get(self, resource_path: str) -> bytes | None:
        """Return the cached bytes, or ``None`` when missing or unreadable."""
        path = self.path_for(resource_path)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            logger.warning(f"Failed to read cached icon {path}: {exc}")
            return None

    def save(self, resource_path: str, data: bytes) -> None:
        """Store *data* atomically; a failed write only logs a warning."""
        path = self.path_for(resource_path)
        try:
            atomic_write(path, data, text_mode=False)
        except OSError as exc:
            logger.warning(f"Failed to cache icon {resource_path}: {exc}")

    def discard(self, resource_path: str) -> None:
        """Drop the entry for *resource_path*, e.g. after it failed to render."""
        path = self.path_for(resource_path)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning(f"Failed to remove cached icon {path}: {exc}")
