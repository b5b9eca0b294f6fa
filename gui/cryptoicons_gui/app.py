"""Main application window: toolbar, icon browser, toasts and actions."""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from PySide6.QtCore import QObject, Qt, QThread, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from cryptoicons.api.client import IconServerClient
from cryptoicons.api.icons import fetch_catalog
from cryptoicons.models.icon import Catalog, ToastMessage
from cryptoicons.storage.config import ViewerSettings
from cryptoicons.storage.preferences import PreferenceStore
from cryptoicons.viewer.actions import IconActions
from cryptoicons.viewer.presenter import ViewPresenter
from cryptoicons.viewer.toasts import ToastCenter
from cryptoicons_gui.pages.icon_browser import IconBrowserPage
from cryptoicons_gui.scheduler import QtScheduler
from cryptoicons_gui.widgets.preview_dialog import PreviewDialog


# ---------------------------------------------------------------------------
# Colour tokens (Catppuccin Mocha / Latte)
# ---------------------------------------------------------------------------

_THEMES = {
    True: {
        "base": "#1e1e2e", "surface": "#313244", "overlay": "#45475a",
        "text": "#cdd6f4", "dim": "#a6adc8", "accent": "#89b4fa",
        "success": "#a6e3a1", "error": "#f38ba8", "info": "#89dceb",
    },
    False: {
        "base": "#eff1f5", "surface": "#ffffff", "overlay": "#ccd0da",
        "text": "#4c4f69", "dim": "#6c6f85", "accent": "#1e66f5",
        "success": "#40a02b", "error": "#d20f39", "info": "#04a5e5",
    },
}


def _stylesheet(dark: bool) -> str:
    t = _THEMES[dark]
    return f"""
        QWidget {{ background-color: {t['base']}; color: {t['text']}; font-size: 13px; }}
        QFrame#toolbar {{ background-color: {t['surface']}; border-bottom: 1px solid {t['overlay']}; }}
        QLabel#pageHeader {{ font-size: 20px; font-weight: 700; }}
        QLabel#resultsSummary, QLabel#stateMessage, QLabel#statCaption {{ color: {t['dim']}; }}
        QLabel#statValue {{ font-size: 22px; font-weight: 700; }}
        QFrame#statCard, QFrame#iconTile {{
            background-color: {t['surface']};
            border: 1px solid {t['overlay']};
            border-radius: 10px;
        }}
        QFrame#iconTile:hover {{ border: 1px solid {t['accent']}; }}
        QLabel#iconSymbol {{ color: {t['accent']}; font-weight: 600; }}
        QLineEdit, QComboBox, QPushButton {{
            background-color: {t['surface']};
            border: 1px solid {t['overlay']};
            border-radius: 6px;
            padding: 4px 10px;
        }}
        QPushButton:hover, QLineEdit:focus {{ border: 1px solid {t['accent']}; }}
        QPushButton:disabled {{ color: {t['overlay']}; }}
        QLabel#toast_success {{ color: {t['success']}; }}
        QLabel#toast_error {{ color: {t['error']}; }}
        QLabel#toast_info {{ color: {t['info']}; }}
    """


# ---------------------------------------------------------------------------
# Background worker
# ---------------------------------------------------------------------------


class _Worker(QThread):
    """Run *fn(*args)* on a background thread and emit the result."""

    result = Signal(object)
    error = Signal(str)

    def __init__(self, fn, *args):
        super().__init__()
        self.fn = fn
        self.args = args

    def run(self):
        try:
            self.result.emit(self.fn(*self.args))
        except Exception as exc:
            self.error.emit(str(exc))


class _MainThreadBridge(QObject):
    """Signals emitted from workers and delivered on the GUI thread."""

    toast_requested = Signal(str, str)
    clipboard_requested = Signal(str)


def _load_catalog(base_url: str, resource_prefix: str) -> Catalog:
    with IconServerClient(base_url) as client:
        return fetch_catalog(client, resource_prefix)


# ---------------------------------------------------------------------------
# MainWindow
# ---------------------------------------------------------------------------


class MainWindow(QMainWindow):
    """Top-level window hosting the icon browser."""

    def __init__(
        self,
        settings: ViewerSettings,
        base_url: str,
        preferences: PreferenceStore | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Crypto Icons")
        self.resize(1200, 800)
        self.setMinimumSize(800, 600)

        self._settings = settings
        self._base_url = base_url
        self._preferences = preferences or PreferenceStore()
        self._active_workers: list[QThread] = []

        # ---- core state ----------------------------------------------------
        scheduler = QtScheduler(self)
        self._presenter = ViewPresenter(
            scheduler,
            debounce_delay=settings.debounce_seconds,
            page_size_options=settings.page_size_options,
            page_size=settings.default_page_size,
        )
        self._toasts = ToastCenter(scheduler, settings.toast_seconds)
        self._toasts.subscribe(self._render_toasts)

        self._bridge = _MainThreadBridge(self)
        self._bridge.toast_requested.connect(self._toasts.add_toast)
        self._bridge.clipboard_requested.connect(self._set_clipboard)
        self._actions_client = IconServerClient(base_url)
        self._actions = IconActions(
            self._actions_client,
            self._bridge.toast_requested.emit,
            self._bridge.clipboard_requested.emit,
            settings.download_dir,
        )

        # ---- layout ---------------------------------------------------------
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        toolbar = QFrame()
        toolbar.setObjectName("toolbar")
        toolbar.setFixedHeight(48)
        toolbar_layout = QHBoxLayout(toolbar)
        toolbar_layout.setContentsMargins(12, 0, 12, 0)
        title = QLabel("Crypto Icons Viewer")
        title.setObjectName("pageHeader")
        toolbar_layout.addWidget(title)
        toolbar_layout.addStretch()
        self._theme_btn = QPushButton()
        self._theme_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._theme_btn.clicked.connect(self._toggle_dark_mode)
        toolbar_layout.addWidget(self._theme_btn)
        root_layout.addWidget(toolbar)

        self._browser = IconBrowserPage(self._presenter, base_url)
        self._browser.preview_requested.connect(self._on_preview)
        self._browser.copy_requested.connect(self._on_copy)
        self._browser.download_requested.connect(self._on_download)
        root_layout.addWidget(self._browser, stretch=1)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._toast_label = QLabel()
        self._status_bar.addWidget(self._toast_label, stretch=1)
        self._status_bar.addPermanentWidget(QLabel(base_url))

        self._apply_theme(self._preferences.dark_mode())
        self.refresh()

    # ---- catalog loading ---------------------------------------------------

    def refresh(self) -> None:
        """Fetch the icon list on a worker thread and hand it to the presenter."""
        self._presenter.begin_loading()
        worker = _Worker(_load_catalog, self._base_url, self._settings.resource_prefix)
        worker.result.connect(self._presenter.set_catalog)
        worker.error.connect(self._on_catalog_error)
        self._start_worker(worker)

    def _on_catalog_error(self, message: str) -> None:
        self._presenter.set_load_error(f"Failed to load crypto icons. {message}")

    # ---- actions -----------------------------------------------------------

    def _on_preview(self, icon_id: str) -> None:
        icon = self._presenter.get_icon(icon_id)
        if icon is None:
            return
        dialog = PreviewDialog(icon, self._base_url, self)
        dialog.copy_requested.connect(self._on_copy)
        dialog.download_requested.connect(self._on_download)
        dialog.exec()

    def _on_copy(self, icon_id: str) -> None:
        icon = self._presenter.get_icon(icon_id)
        if icon is not None:
            self._start_worker(_Worker(self._actions.copy, icon))

    def _on_download(self, icon_id: str) -> None:
        icon = self._presenter.get_icon(icon_id)
        if icon is None:
            return
        suggested = str(self._actions.download_dir / icon.file_name)
        path, _ = QFileDialog.getSaveFileName(
            self, "Download icon", suggested, "SVG files (*.svg)"
        )
        if path:
            self._start_worker(_Worker(self._actions.download, icon, Path(path)))

    def _set_clipboard(self, text: str) -> None:
        QGuiApplication.clipboard().setText(text)

    # ---- toasts ------------------------------------------------------------

    def _render_toasts(self, toasts: list[ToastMessage]) -> None:
        if not toasts:
            self._toast_label.clear()
            return
        latest = toasts[-1]
        self._toast_label.setObjectName(f"toast_{latest.kind}")
        self._toast_label.setText(latest.message)
        self._toast_label.style().unpolish(self._toast_label)
        self._toast_label.style().polish(self._toast_label)

    # ---- theme -------------------------------------------------------------

    def _apply_theme(self, dark: bool) -> None:
        self.setStyleSheet(_stylesheet(dark))
        self._theme_btn.setText("Light mode" if dark else "Dark mode")

    def _toggle_dark_mode(self) -> None:
        dark = not self._preferences.dark_mode()
        self._preferences.set_dark_mode(dark)
        self._apply_theme(dark)

    # ---- worker lifecycle --------------------------------------------------

    def _start_worker(self, worker: QThread) -> None:
        """Keep a reference to *worker* until it finishes, then start it."""
        self._active_workers.append(worker)
        worker.finished.connect(lambda: self._remove_worker(worker))
        worker.start()

    def _remove_worker(self, worker: QThread) -> None:
        try:
            self._active_workers.remove(worker)
        except ValueError:
            pass

    # ---- teardown ----------------------------------------------------------

    def closeEvent(self, event) -> None:  # noqa: N802
        """Cancel timers, wait for workers, and close the HTTP client."""
        self._browser.teardown()
        self._presenter.close()
        self._toasts.close()
        for worker in list(self._active_workers):
            if worker.isRunning():
                worker.wait(1000)
        self._actions_client.close()
        logger.debug("Main window closed")
        super().closeEvent(event)
