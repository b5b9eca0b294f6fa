"""Large preview of a single icon with copy / download actions."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cryptoicons.models.icon import IconRecord

from .svg_loader import SvgLabel

_PREVIEW_SIZE = 256


class PreviewDialog(QDialog):
    """Modal preview of *icon*.

    Signals
    -------
    copy_requested(str), download_requested(str)
        Emitted with the icon id.
    """

    copy_requested = Signal(str)
    download_requested = Signal(str)

    def __init__(self, icon: IconRecord, base_url: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._icon = icon
        self.setWindowTitle(icon.display_name)
        self.setModal(True)
        self.setMinimumWidth(360)

        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        self._image = SvgLabel(_PREVIEW_SIZE, placeholder_text="Loading...")
        layout.addWidget(self._image, alignment=Qt.AlignmentFlag.AlignHCenter)
        self._image.load(base_url, icon.resource_path)

        details = QFormLayout()
        details.addRow("Name:", QLabel(icon.display_name))
        if icon.symbol:
            details.addRow("Symbol:", QLabel(icon.symbol))
        details.addRow("File:", QLabel(icon.file_name))
        details.addRow("Format:", QLabel("SVG"))
        layout.addLayout(details)

        buttons = QHBoxLayout()
        copy_btn = QPushButton("Copy SVG")
        copy_btn.clicked.connect(lambda: self.copy_requested.emit(self._icon.id))
        buttons.addWidget(copy_btn)

        download_btn = QPushButton("Download")
        download_btn.clicked.connect(lambda: self.download_requested.emit(self._icon.id))
        buttons.addWidget(download_btn)

        buttons.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.reject)
        buttons.addWidget(close_btn)
        layout.addLayout(buttons)

    def done(self, result: int) -> None:
        self._image.cancel()
        super().done(result)
