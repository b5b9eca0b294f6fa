"""Cross-platform path management for the icon viewer.

All persistent file and directory locations are defined here.  Directory
creation is deferred to helpers rather than happening at import time,
keeping imports side-effect-free.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from platformdirs import user_cache_dir, user_config_dir, user_downloads_dir

# ---------------------------------------------------------------------------
# Application identifier
# ---------------------------------------------------------------------------

APP_NAME = "cryptoicons-viewer"

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------

CONFIG_DIR: Path = Path(user_config_dir(APP_NAME))
CACHE_DIR: Path = Path(user_cache_dir(APP_NAME))
DOWNLOADS_DIR: Path = Path(user_downloads_dir())

# ---------------------------------------------------------------------------
# Standard file locations
# ---------------------------------------------------------------------------

SETTINGS_FILE = CONFIG_DIR / "settings.json"
PREFERENCES_FILE = CONFIG_DIR / "preferences.json"
SVG_CACHE_DIR = CACHE_DIR / "svg"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ensure_parents(path: Path) -> Path:
    """Create all parent directories for *path* if they do not exist.

    Returns *path* unchanged so the call can be used inline.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(
    path: Path,
    data: Union[str, bytes],
    text_mode: bool = True,
) -> None:
    """Write *data* to *path* atomically (write-to-tmp then replace).

    When *text_mode* is ``True`` (the default) the file is opened in text
    mode; pass ``False`` for binary payloads such as downloaded icons.
    Mismatched ``str``/``bytes`` data is converted to fit the mode.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    ensure_parents(tmp)

    try:
        if text_mode:
            text = data.decode() if isinstance(data, bytes) else data
            with tmp.open("w", encoding="utf-8") as fh:
                fh.write(text)
        else:
            raw = data.encode() if isinstance(data, str) else data
            with tmp.open("wb") as fh:
                fh.write(raw)
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            try:
                tmp.unlink()
            except OSError:
                pass
