"""``call_later`` adapter on top of single-shot ``QTimer`` objects.

Lets the framework-free debounce controller and toast center schedule
work on the Qt event loop.
"""

from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QObject, QTimer


class _QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    def _finished(self) -> None:
        if self._timer is not None:
            self._timer.deleteLater()
            self._timer = None

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._finished()


class QtScheduler:
    """Schedule callbacks on the Qt event loop of *parent*'s thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(delay * 1000)))
        handle = _QtTimerHandle(timer)
        timer.timeout.connect(handle._finished)
        timer.timeout.connect(callback)
        timer.start()
        return handle
