"""Pydantic v2 models for icon records, catalogs, and toast messages."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ToastKind = Literal["success", "error", "info"]


class ParsedName(BaseModel):
    """Metadata extracted from a single icon filename."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    symbol: str | None = None


class IconRecord(BaseModel):
    """One SVG icon file in the catalog.

    ``id`` is the filename without its extension and is unique within a
    catalog.  ``resource_path`` is the URL path the icon server exposes the
    raw file under.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    file_name: str
    resource_path: str
    display_name: str
    symbol: str | None = None

    def matches(self, needle: str) -> bool:
        """Return ``True`` if *needle* (already lowercased) occurs in the
        display name, id, or symbol."""
        if needle in self.display_name.lower():
            return True
        if needle in self.id.lower():
            return True
        return self.symbol is not None and needle in self.symbol.lower()


class Catalog(BaseModel):
    """Immutable snapshot of every icon known for a session."""

    model_config = ConfigDict(frozen=True)

    icons: tuple[IconRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.icons)

    @property
    def ids(self) -> list[str]:
        return [icon.id for icon in self.icons]

    def get(self, icon_id: str) -> IconRecord | None:
        """Return the record with *icon_id*, or ``None``."""
        for icon in self.icons:
            if icon.id == icon_id:
                return icon
        return None


class IconListResponse(BaseModel):
    """Payload returned by ``GET /api/icons``."""

    files: list[str] | None = None
    error: str | None = None


class ToastMessage(BaseModel):
    """Transient user feedback shown by the UI shell."""

    model_config = ConfigDict(frozen=True)

    id: str
    message: str
    kind: ToastKind = "info"
    duration: float = Field(default=3.0, ge=0)
