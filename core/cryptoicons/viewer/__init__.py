"""Presentation-side state: debounce, presenter, toasts and icon actions."""

from cryptoicons.viewer.debounce import DebounceController, Scheduler
from cryptoicons.viewer.presenter import ViewPresenter, ViewState
from cryptoicons.viewer.toasts import ToastCenter

__all__ = [
    "DebounceController",
    "Scheduler",
    "ToastCenter",
    "ViewPresenter",
    "ViewState",
]
