"""Icon tile widget used in the browser grid."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from cryptoicons.models.icon import IconRecord

from .svg_loader import SvgLabel

_TILE_ICON_SIZE = 64


class IconTile(QFrame):
    """One icon with its name, symbol badge, and action buttons.

    Signals
    -------
    preview_requested(str), copy_requested(str), download_requested(str)
        Emitted with the icon id.
    """

    preview_requested = Signal(str)
    copy_requested = Signal(str)
    download_requested = Signal(str)

    def __init__(self, icon: IconRecord, base_url: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._icon = icon
        self.setObjectName("iconTile")
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        self.setMinimumWidth(150)
        self.setToolTip(icon.file_name)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        self._image = SvgLabel(_TILE_ICON_SIZE)
        self._image.setAccessibleName(icon.display_name)
        layout.addWidget(self._image, alignment=Qt.AlignmentFlag.AlignHCenter)
        self._image.load(base_url, icon.resource_path)

        name = QLabel(icon.display_name)
        name.setObjectName("iconName")
        name.setAlignment(Qt.AlignmentFlag.AlignCenter)
        name.setWordWrap(True)
        layout.addWidget(name)

        if icon.symbol:
            symbol = QLabel(icon.symbol)
            symbol.setObjectName("iconSymbol")
            symbol.setAlignment(Qt.AlignmentFlag.AlignCenter)
            layout.addWidget(symbol)

        buttons = QHBoxLayout()
        buttons.setSpacing(4)
        for text, tip, signal in (
            ("Preview", f"Preview {icon.display_name} icon", self.preview_requested),
            ("Copy", f"Copy {icon.display_name} SVG", self.copy_requested),
            ("Download", f"Download {icon.display_name} icon", self.download_requested),
        ):
            btn = QPushButton(text)
            btn.setToolTip(tip)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.clicked.connect(lambda _=False, s=signal: s.emit(self._icon.id))
            buttons.addWidget(btn)
        layout.addLayout(buttons)

    @property
    def icon(self) -> IconRecord:
        return self._icon

    def release(self) -> None:
        """Stop any in-flight icon fetch before the tile is discarded."""
        self._image.cancel()

    def mouseDoubleClickEvent(self, event) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton:
            self.preview_requested.emit(self._icon.id)
        super().mouseDoubleClickEvent(event)
