"""Shared fixtures: a manual clock scheduler and a small sample catalog."""
from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable

import pytest

from cryptoicons.catalog.builder import build_catalog


class _ManualHandle:
    def __init__(self, due: float) -> None:
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by :meth:`advance` instead of wall-clock time."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, _ManualHandle, Callable[[], Any]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> _ManualHandle:
        handle = _ManualHandle(self.now + delay)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> None:
        self.advance_to(self.now + seconds)

    def advance_to(self, target: float) -> None:
        while self._queue and self._queue[0][0] <= target + 1e-9:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, due)
            callback()
        self.now = max(self.now, target)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


SAMPLE_FILES = [
    "Bitcoin (BTC).svg",
    "Ethereum (ETH).svg",
    "Ethereum Classic (ETC).svg",
    "Zcash (ZEC).svg",
    "yearn.finance (YFI).svg",
    "crypto-name.svg",
    "Tether (USDT).svg",
    "Monero (XMR).svg",
    "Litecoin (LTC).svg",
    "Dogecoin (DOGE).svg",
    "Cardano (ADA).svg",
    "Solana (SOL).svg",
    "README.md",
]


@pytest.fixture
def sample_catalog():
    return build_catalog(SAMPLE_FILES)


@pytest.fixture
def crypto_catalog():
    return build_catalog(["Bitcoin (BTC).svg", "Ethereum (ETH).svg", "Zcash (ZEC).svg"])
