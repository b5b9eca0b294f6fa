"""Asynchronous SVG loader for PySide6 widgets.

Fetches icon files from the icon server in a background thread, optionally
caches them on disk (see :func:`configure_disk_cache`), and renders them
to ``QImage`` for display.

Thread safety: the worker renders into a ``QImage`` (which is thread-safe)
and the label converts it to ``QPixmap`` on the main thread via the signal
handler.
"""
from __future__ import annotations

from loguru import logger
from PySide6.QtCore import QByteArray, QSize, Qt, QThread, Signal
from PySide6.QtGui import QImage, QPainter, QPixmap
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import QLabel

from cryptoicons.api.client import ContentFetchError, IconServerClient
from cryptoicons.storage.cache import SvgCache


# ---------------------------------------------------------------------------
# Disk cache for downloaded icons
# ---------------------------------------------------------------------------


_disk_cache: SvgCache | None = None


def configure_disk_cache(cache: SvgCache | None) -> None:
    """Use *cache* for later loads; ``None`` disables disk caching."""
    global _disk_cache
    _disk_cache = cache


def render_svg(data: bytes, size: QSize) -> QImage:
    """Render SVG *data* into a transparent image of *size*.

    Returns a null ``QImage`` when the data is not valid SVG.
    """
    renderer = QSvgRenderer(QByteArray(data))
    if not renderer.isValid():
        return QImage()
    image = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)
    painter = QPainter(image)
    renderer.setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatio)
    renderer.render(painter)
    painter.end()
    return image


# ---------------------------------------------------------------------------
# Download worker
# ---------------------------------------------------------------------------


class _SvgWorker(QThread):
    """Fetch and render one icon in a background thread.

    Emits ``image_ready(path, QImage)``; each worker uses its own client so
    no ``httpx.Client`` is shared across threads.
    """

    image_ready = Signal(str, QImage)
    error = Signal(str, str)

    def __init__(self, base_url: str, resource_path: str, size: QSize):
        super().__init__()
        self.base_url = base_url
        self.resource_path = resource_path
        self.size = size
        self._cancelled = False

    def cancel(self) -> None:
        """Request cooperative cancellation (checked between steps)."""
        self._cancelled = True

    def run(self):
        cache = _disk_cache
        try:
            image = QImage()
            if cache is not None:
                cached = cache.get(self.resource_path)
                if cached is not None:
                    image = render_svg(cached, self.size)
                    if image.isNull():
                        logger.debug(f"Discarding unreadable cache entry for {self.resource_path}")
                        cache.discard(self.resource_path)

            if image.isNull():
                with IconServerClient(self.base_url) as client:
                    data = client.fetch_bytes(self.resource_path)
                if self._cancelled:
                    return
                image = render_svg(data, self.size)
                if image.isNull():
                    self.error.emit(self.resource_path, "Invalid SVG data")
                    return
                if cache is not None:
                    cache.save(self.resource_path, data)

            if not self._cancelled:
                self.image_ready.emit(self.resource_path, image)
        except ContentFetchError as exc:
            if not self._cancelled:
                self.error.emit(self.resource_path, str(exc))


# Workers stay referenced here until they finish, even if their label is
# deleted first.
_live_workers: set[_SvgWorker] = set()


def _track(worker: _SvgWorker) -> None:
    _live_workers.add(worker)
    worker.finished.connect(lambda: _live_workers.discard(worker))


# ---------------------------------------------------------------------------
# SvgLabel - a QLabel that loads icons asynchronously
# ---------------------------------------------------------------------------


class SvgLabel(QLabel):
    """A QLabel that fetches and displays an SVG icon from the icon server.

    Signals:
        image_failed(str, str) - emitted with resource path and error message
    """

    image_failed = Signal(str, str)

    def __init__(self, size: int = 64, placeholder_text: str = "...", parent=None):
        super().__init__(parent)
        self._size = QSize(size, size)
        self._placeholder = placeholder_text
        self._path: str | None = None
        self._worker: _SvgWorker | None = None

        self.setFixedSize(self._size)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setText(placeholder_text)

    def load(self, base_url: str, resource_path: str) -> None:
        """Start loading *resource_path*; a newer call supersedes older ones."""
        if resource_path == self._path and self.pixmap() is not None and not self.pixmap().isNull():
            return
        self._path = resource_path
        self.setText(self._placeholder)

        # Cancel previous download cooperatively; stale results are ignored.
        if self._worker and self._worker.isRunning():
            self._worker.cancel()

        self._worker = _SvgWorker(base_url, resource_path, self._size)
        self._worker.image_ready.connect(self._on_loaded)
        self._worker.error.connect(self._on_error)
        _track(self._worker)
        self._worker.start()

    def cancel(self) -> None:
        if self._worker and self._worker.isRunning():
            self._worker.cancel()

    def _on_loaded(self, resource_path: str, image: QImage) -> None:
        if resource_path != self._path:
            return  # stale response
        self.setPixmap(QPixmap.fromImage(image))

    def _on_error(self, resource_path: str, error: str) -> None:
        if resource_path != self._path:
            return
        self.setText("?")
        self.image_failed.emit(resource_path, error)
