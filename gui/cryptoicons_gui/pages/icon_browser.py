"""Icon browser page -- searchable, paginated grid of icon tiles.

The page is a thin renderer over :class:`~cryptoicons.viewer.ViewPresenter`:
user input is forwarded as presenter commands and every
:class:`~cryptoicons.viewer.ViewState` the presenter publishes is drawn as
is.  Page Up / Page Down and ``[`` / ``]`` change pages.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from cryptoicons.viewer.presenter import ViewPresenter, ViewState

from ..widgets.icon_tile import IconTile

_TILE_MIN_WIDTH = 180


class _StatCard(QFrame):
    """Number + caption pair in the stats row."""

    def __init__(self, caption: str, parent: QWidget | None = None):
        super().__init__(parent)
        self.setObjectName("statCard")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        self._value = QLabel("0")
        self._value.setObjectName("statValue")
        layout.addWidget(self._value)
        label = QLabel(caption)
        label.setObjectName("statCaption")
        layout.addWidget(label)

    def set_value(self, text: str) -> None:
        self._value.setText(text)


class IconBrowserPage(QWidget):
    """Grid view of the icon catalog.

    Signals
    -------
    preview_requested(str), copy_requested(str), download_requested(str)
        Emitted with an icon id when the user activates a tile action.
    """

    preview_requested = Signal(str)
    copy_requested = Signal(str)
    download_requested = Signal(str)

    def __init__(self, presenter: ViewPresenter, base_url: str, parent: QWidget | None = None):
        super().__init__(parent)
        self._presenter = presenter
        self._base_url = base_url
        self._tiles: list[IconTile] = []
        self._columns = 4
        self._last_state: ViewState | None = None

        self._setup_ui()
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._unsubscribe = presenter.subscribe(self._render)
        self._render(presenter.state)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 16, 24, 16)
        root.setSpacing(12)

        # -- Top bar: search ------------------------------------------------
        top_bar = QHBoxLayout()
        header = QLabel("Crypto Icons")
        header.setObjectName("pageHeader")
        top_bar.addWidget(header)
        top_bar.addStretch()

        self._search_input = QLineEdit()
        self._search_input.setPlaceholderText("Search crypto icons by name or symbol...")
        self._search_input.setClearButtonEnabled(True)
        self._search_input.setMinimumWidth(320)
        self._search_input.textChanged.connect(self._presenter.set_query)
        self._search_input.returnPressed.connect(self._presenter.apply_query_now)
        top_bar.addWidget(self._search_input)
        root.addLayout(top_bar)

        # -- Stats ----------------------------------------------------------
        stats = QHBoxLayout()
        self._total_stat = _StatCard("Total Icons")
        self._filtered_stat = _StatCard("Filtered Results")
        format_stat = _StatCard("Vector Format")
        format_stat.set_value("SVG")
        for card in (self._total_stat, self._filtered_stat, format_stat):
            stats.addWidget(card)
        root.addLayout(stats)

        self._results_label = QLabel()
        self._results_label.setObjectName("resultsSummary")
        root.addWidget(self._results_label)

        # -- Loading / error / empty states ---------------------------------
        self._message_label = QLabel()
        self._message_label.setObjectName("stateMessage")
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setWordWrap(True)
        root.addWidget(self._message_label, stretch=1)

        # -- Icon grid ------------------------------------------------------
        self._grid_container = QWidget()
        self._grid_layout = QGridLayout(self._grid_container)
        self._grid_layout.setContentsMargins(0, 0, 0, 0)
        self._grid_layout.setSpacing(12)
        self._grid_layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        self._scroll.setWidget(self._grid_container)
        self._scroll.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        root.addWidget(self._scroll, stretch=1)

        # -- Bottom bar: pagination -----------------------------------------
        bottom_bar = QHBoxLayout()
        bottom_bar.addWidget(QLabel("Per page:"))
        self._page_size_combo = QComboBox()
        state = self._presenter.state
        for size in state.page_size_options:
            self._page_size_combo.addItem(str(size), size)
        self._page_size_combo.setCurrentIndex(self._page_size_combo.findData(state.page_size))
        self._page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)
        bottom_bar.addWidget(self._page_size_combo)
        bottom_bar.addStretch()

        self._btn_prev = QPushButton("<  Prev")
        self._btn_prev.clicked.connect(self._presenter.prev_page)
        bottom_bar.addWidget(self._btn_prev)

        self._page_label = QLabel("Page 1 of 1")
        self._page_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._page_label.setMinimumWidth(120)
        bottom_bar.addWidget(self._page_label)

        self._btn_next = QPushButton("Next  >")
        self._btn_next.clicked.connect(self._presenter.next_page)
        bottom_bar.addWidget(self._btn_next)
        root.addLayout(bottom_bar)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _on_page_size_changed(self, index: int) -> None:
        size = self._page_size_combo.itemData(index)
        if size is not None and size != self._presenter.state.page_size:
            self._presenter.set_page_size(int(size))

    def keyPressEvent(self, event) -> None:  # noqa: N802
        key = event.key()
        if key in (Qt.Key.Key_PageDown, Qt.Key.Key_BracketRight):
            self._presenter.next_page()
            return
        if key in (Qt.Key.Key_PageUp, Qt.Key.Key_BracketLeft):
            self._presenter.prev_page()
            return
        super().keyPressEvent(event)

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        columns = max(1, event.size().width() // _TILE_MIN_WIDTH)
        if columns != self._columns:
            self._columns = columns
            if self._last_state is not None:
                self._rebuild_grid(self._last_state)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self, state: ViewState) -> None:
        previous = self._last_state
        self._last_state = state

        if self._search_input.text() != state.raw_query:
            self._search_input.blockSignals(True)
            self._search_input.setText(state.raw_query)
            self._search_input.blockSignals(False)

        self._total_stat.set_value(f"{state.total_icons:,}")
        self._filtered_stat.set_value(f"{state.total_matches:,}")
        self._results_label.setText(state.results_summary or "")
        self._results_label.setVisible(bool(state.results_summary))

        combo_index = self._page_size_combo.findData(state.page_size)
        if combo_index >= 0 and combo_index != self._page_size_combo.currentIndex():
            self._page_size_combo.blockSignals(True)
            self._page_size_combo.setCurrentIndex(combo_index)
            self._page_size_combo.blockSignals(False)

        self._page_label.setText(f"Page {state.page_index} of {state.total_pages}")
        self._btn_prev.setEnabled(state.status == "ready" and state.has_previous)
        self._btn_next.setEnabled(state.status == "ready" and state.has_next)

        if state.status == "loading":
            self._show_message("Loading crypto icons...")
        elif state.status == "error":
            self._show_message(f"Error Loading Icons\n\n{state.error}")
        elif not state.page_items:
            if state.effective_query.strip():
                self._show_message(
                    "No icons found\n\nTry searching with different keywords "
                    "or check the spelling."
                )
            else:
                self._show_message("No icons available.")
        else:
            self._message_label.setVisible(False)
            self._scroll.setVisible(True)

        if previous is None or previous.page_items != state.page_items:
            self._rebuild_grid(state)

    def _show_message(self, text: str) -> None:
        self._message_label.setText(text)
        self._message_label.setVisible(True)
        self._scroll.setVisible(False)

    def _rebuild_grid(self, state: ViewState) -> None:
        self._clear_grid()
        for idx, icon in enumerate(state.page_items):
            tile = IconTile(icon, self._base_url, parent=self._grid_container)
            tile.preview_requested.connect(self.preview_requested.emit)
            tile.copy_requested.connect(self.copy_requested.emit)
            tile.download_requested.connect(self.download_requested.emit)
            self._grid_layout.addWidget(tile, idx // self._columns, idx % self._columns)
            self._tiles.append(tile)
        self._scroll.verticalScrollBar().setValue(0)

    def _clear_grid(self) -> None:
        """Remove all tiles from the grid layout."""
        while self._grid_layout.count() > 0:
            item = self._grid_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                if isinstance(widget, IconTile):
                    widget.release()
                widget.setParent(None)
                widget.deleteLater()
        self._tiles = []

    def teardown(self) -> None:
        """Stop listening to the presenter and drop all tiles."""
        self._unsubscribe()
        self._clear_grid()
