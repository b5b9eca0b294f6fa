"""Copy and download actions for a single icon.

Both actions fetch the icon content on demand and are safe to run off the
UI thread as long as the clipboard and feedback callables are.  Failures are
reported through the feedback callable and never touch catalog or query state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from loguru import logger

from ..api.client import ContentFetchError, IconServerClient
from ..models.icon import IconRecord, ToastKind
from ..storage.paths import atomic_write


class IconActions:
    """User-triggered operations on icons.

    Parameters
    ----------
    client:
        Client used to fetch the icon content.
    add_toast:
        Feedback sink, called as ``add_toast(message, kind)``; usually
        :meth:`ToastCenter.add_toast <cryptoicons.viewer.toasts.ToastCenter.add_toast>`.
    clipboard:
        Callable that places text on the system clipboard.
    download_dir:
        Default directory for :meth:`download`.
    """

    def __init__(
        self,
        client: IconServerClient,
        add_toast: Callable[[str, ToastKind], Any],
        clipboard: Callable[[str], None],
        download_dir: Path,
    ) -> None:
        self._client = client
        self._add_toast = add_toast
        self._clipboard = clipboard
        self.download_dir = Path(download_dir)

    def copy(self, icon: IconRecord) -> bool:
        """Copy the SVG markup of *icon* to the clipboard."""
        try:
            markup = self._client.fetch_text(icon.resource_path)
        except ContentFetchError as exc:
            logger.warning(f"Failed to copy {icon.file_name}: {exc}")
            self._add_toast(f"Failed to copy {icon.display_name} SVG", "error")
            return False
        self._clipboard(markup)
        self._add_toast(f"{icon.display_name} SVG copied to clipboard!", "success")
        return True

    def download(self, icon: IconRecord, destination: Path | None = None) -> Path | None:
        """Save *icon* to *destination* (default ``download_dir / file_name``).

        Returns the written path, or ``None`` if fetching or writing failed.
        """
        target = Path(destination) if destination is not None else self.download_dir / icon.file_name
        try:
            data = self._client.fetch_bytes(icon.resource_path)
            atomic_write(target, data, text_mode=False)
        except (ContentFetchError, OSError) as exc:
            logger.warning(f"Failed to download {icon.file_name}: {exc}")
            self._add_toast(f"Failed to download {icon.display_name}", "error")
            return None
        logger.debug(f"Downloaded {icon.file_name} to {target}")
        self._add_toast(f"{icon.display_name} downloaded!", "success")
        return target
