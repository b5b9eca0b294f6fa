"""Debounced delivery of search text.

The controller sits between the search box and the presenter so the
catalog is only filtered once the user stops typing for ``delay`` seconds.

Timers come from a *scheduler*: any object with
``call_later(delay, callback)`` returning a handle that has ``cancel()``.
An :mod:`asyncio` event loop fits that shape directly; the Qt shell
supplies an adapter built on ``QTimer``.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Protocol, TypeVar

from loguru import logger

T = TypeVar("T")


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class DebounceController(Generic[T]):
    """Emit the latest pushed value once *delay* seconds pass without a push.

    The owner must call :meth:`close` on teardown.  After that no value is
    ever emitted and further pushes are ignored.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay: float,
        on_emit: Callable[[T], None],
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self._scheduler = scheduler
        self._delay = delay
        self._on_emit = on_emit
        self._handle: TimerHandle | None = None
        self._pending: T | None = None
        self._has_pending = False
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """``True`` while a value is waiting for the quiescence window."""
        return self._has_pending

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        """Record *value* and restart the quiescence window."""
        if self._closed:
            logger.debug("Ignoring push to a closed debounce controller")
            return
        self._cancel_timer()
        self._pending = value
        self._has_pending = True
        self._handle = self._scheduler.call_later(self._delay, self._fire)

    def flush(self) -> None:
        """Emit the pending value now instead of waiting."""
        if self._closed or not self._has_pending:
            return
        self._cancel_timer()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending value without emitting it."""
        self._cancel_timer()
        self._pending = None
        self._has_pending = False

    def close(self) -> None:
        """Cancel pending work and refuse any further pushes."""
        self.cancel()
        self._closed = True

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self._closed or not self._has_pending:
            return
        value = self._pending
        self._pending = None
        self._has_pending = False
        self._on_emit(value)  # type: ignore[arg-type]
