"""Transient feedback messages ("toasts") with automatic expiry."""

from __future__ import annotations

import uuid
from typing import Callable, get_args

from loguru import logger

from ..models.icon import ToastKind, ToastMessage
from .debounce import Scheduler, TimerHandle

DEFAULT_TOAST_SECONDS = 3.0


class ToastCenter:
    """Keep the list of visible toasts and expire each after *duration*.

    Timers come from the same kind of scheduler the debounce controller
    uses.  Call :meth:`close` on teardown so no timer fires afterwards.
    """

    def __init__(self, scheduler: Scheduler, duration: float = DEFAULT_TOAST_SECONDS) -> None:
        self._scheduler = scheduler
        self._duration = duration
        self._toasts: dict[str, ToastMessage] = {}
        self._timers: dict[str, TimerHandle] = {}
        self._listeners: list[Callable[[list[ToastMessage]], None]] = []
        self._closed = False

    @property
    def toasts(self) -> list[ToastMessage]:
        """Visible toasts, oldest first."""
        return list(self._toasts.values())

    def subscribe(
        self, listener: Callable[[list[ToastMessage]], None]
    ) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def add_toast(self, message: str, kind: ToastKind = "info") -> ToastMessage:
        if kind not in get_args(ToastKind):
            raise ValueError(f"Unknown toast kind: {kind!r}")
        toast = ToastMessage(
            id=uuid.uuid4().hex, message=message, kind=kind, duration=self._duration
        )
        if self._closed:
            logger.debug(f"Toast center closed, dropping toast: {message}")
            return toast
        self._toasts[toast.id] = toast
        self._timers[toast.id] = self._scheduler.call_later(
            self._duration, lambda: self._expire(toast.id)
        )
        self._notify()
        return toast

    def remove_toast(self, toast_id: str) -> None:
        """Dismiss a toast before it expires.  Unknown ids are ignored."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        if self._toasts.pop(toast_id, None) is not None:
            self._notify()

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._toasts.clear()
        self._listeners.clear()
        self._closed = True

    def _expire(self, toast_id: str) -> None:
        self._timers.pop(toast_id, None)
        if self._toasts.pop(toast_id, None) is not None:
            self._notify()

    def _notify(self) -> None:
        snapshot = self.toasts
        for listener in list(self._listeners):
            listener(snapshot)
