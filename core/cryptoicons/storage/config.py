"""User settings for the icon viewer.

Settings live in :data:`~cryptoicons.storage.paths.SETTINGS_FILE` as JSON.
A few values can be overridden from the environment, which takes priority
over the file:

* ``CRYPTOICONS_ICON_DIR`` -- directory the local icon server lists.
* ``CRYPTOICONS_SERVER_URL`` -- use a remote icon server instead.
* ``CRYPTOICONS_LOG_LEVEL`` -- loguru level for the GUI sink.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .paths import DOWNLOADS_DIR, SETTINGS_FILE, atomic_write

ENV_ICON_DIR = "CRYPTOICONS_ICON_DIR"
ENV_SERVER_URL = "CRYPTOICONS_SERVER_URL"
ENV_LOG_LEVEL = "CRYPTOICONS_LOG_LEVEL"


class ViewerSettings(BaseModel):
    """All tunable settings, with defaults matching the stock viewer."""

    model_config = ConfigDict(validate_assignment=True)

    icon_dir: Path = Path("public") / "icons"
    server_url: str | None = None
    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0, le=65535)
    resource_prefix: str = "/icons"
    debounce_ms: int = Field(default=300, ge=0)
    page_size_options: tuple[int, ...] = (12, 24, 48, 96)
    default_page_size: int = 24
    toast_duration_ms: int = Field(default=3000, ge=0)
    download_dir: Path = DOWNLOADS_DIR
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_page_sizes(self) -> ViewerSettings:
        if not self.page_size_options or min(self.page_size_options) < 1:
            raise ValueError("page_size_options must contain positive sizes")
        if self.default_page_size not in self.page_size_options:
            raise ValueError("default_page_size must be one of page_size_options")
        return self

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @property
    def toast_seconds(self) -> float:
        return self.toast_duration_ms / 1000


def _env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    if os.getenv(ENV_ICON_DIR):
        overrides["icon_dir"] = os.environ[ENV_ICON_DIR]
    if os.getenv(ENV_SERVER_URL):
        overrides["server_url"] = os.environ[ENV_SERVER_URL]
    if os.getenv(ENV_LOG_LEVEL):
        overrides["log_level"] = os.environ[ENV_LOG_LEVEL].upper()
    return overrides


def load_settings(path: Path | None = None) -> ViewerSettings:
    """Load settings from *path* (default :data:`SETTINGS_FILE`).

    A missing file gives the defaults.  An unreadable or invalid file is
    logged and also gives the defaults.  Environment overrides are applied
    last.
    """
    path = path or SETTINGS_FILE
    data: dict = {}
    if path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
            data = loaded if isinstance(loaded, dict) else {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to read settings from {path}: {exc}")

    data.update(_env_overrides())
    try:
        return ViewerSettings.model_validate(data)
    except ValidationError as exc:
        logger.warning(f"Invalid settings in {path}, using defaults: {exc}")
        return ViewerSettings.model_validate(_env_overrides())


def save_settings(settings: ViewerSettings, path: Path | None = None) -> None:
    """Persist *settings* to disk atomically."""
    path = path or SETTINGS_FILE
    atomic_write(path, settings.model_dump_json(indent=2))
    logger.debug(f"Settings saved to {path}")
