"""Re-export all data models for convenient access."""

from cryptoicons.models.icon import (
    Catalog,
    IconListResponse,
    IconRecord,
    ParsedName,
    ToastKind,
    ToastMessage,
)

__all__ = [
    "Catalog",
    "IconListResponse",
    "IconRecord",
    "ParsedName",
    "ToastKind",
    "ToastMessage",
]
