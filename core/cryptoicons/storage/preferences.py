"""Small persisted key-value store for UI preferences.

Values are grouped by namespace and written to JSON after every change::

    prefs = PreferenceStore()
    prefs.set("appearance", "dark_mode", True)
    prefs.get("appearance", "dark_mode", default=False)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from .paths import PREFERENCES_FILE, atomic_write

_APPEARANCE = "appearance"


class PreferenceStore:
    """Namespaced preferences persisted to a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else PREFERENCES_FILE
        self._data: dict[str, dict[str, Any]] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            self._data = {}
            return
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
            self._data = loaded if isinstance(loaded, dict) else {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to load preferences from {self._path}: {exc}")
            self._data = {}

    def save(self) -> None:
        try:
            atomic_write(self._path, json.dumps(self._data, ensure_ascii=False, indent=2))
        except OSError as exc:
            logger.warning(f"Failed to save preferences to {self._path}: {exc}")

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        return self._data.get(namespace, {}).get(key, default)

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Set a value under a namespace and persist immediately."""
        self._data.setdefault(namespace, {})[key] = value
        self.save()

    def delete(self, namespace: str, key: str) -> None:
        ns = self._data.get(namespace)
        if not ns or key not in ns:
            return
        del ns[key]
        self.save()

    # -- appearance ---------------------------------------------------------

    def dark_mode(self) -> bool:
        return bool(self.get(_APPEARANCE, "dark_mode", False))

    def set_dark_mode(self, enabled: bool) -> None:
        self.set(_APPEARANCE, "dark_mode", bool(enabled))
