"""Filter and paginate a catalog.

Everything here is a pure function of its arguments: the presenter calls
:func:`query` again whenever the effective query or pagination changes.
Catalogs are small, so a linear scan per call is fine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..models.icon import Catalog, IconRecord


@dataclass(frozen=True)
class FilteredView:
    """Result of running a query against a catalog."""

    matches: tuple[IconRecord, ...]
    page_items: tuple[IconRecord, ...]
    total_matches: int
    total_pages: int
    page_index: int
    page_size: int


def normalize_query(text: str) -> str:
    """Return the lowercased form used for matching.

    Surrounding whitespace is kept: it only decides whether the query is
    empty, see :func:`filter_icons`.
    """
    return text.lower()


def count_pages(total: int, page_size: int) -> int:
    """``ceil(total / page_size)``, never less than 1."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(total / page_size))


def clamp_page(page_index: int, total_pages: int) -> int:
    """Clamp a 1-based *page_index* into ``[1, total_pages]``."""
    return min(max(1, page_index), max(1, total_pages))


def filter_icons(catalog: Catalog, effective_query: str) -> tuple[IconRecord, ...]:
    """Return the records matching *effective_query*, in catalog order."""
    if not effective_query.strip():
        return catalog.icons
    needle = normalize_query(effective_query)
    return tuple(icon for icon in catalog.icons if icon.matches(needle))


def query(
    catalog: Catalog,
    effective_query: str,
    page_index: int,
    page_size: int,
) -> FilteredView:
    """Filter *catalog* by *effective_query* and slice out one page.

    *page_index* is 1-based and is clamped into the valid range rather
    than rejected.  A non-positive *page_size* is a caller bug and raises
    :class:`ValueError`.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    matches = filter_icons(catalog, effective_query)
    total_pages = count_pages(len(matches), page_size)
    page = clamp_page(page_index, total_pages)
    start = (page - 1) * page_size
    return FilteredView(
        matches=matches,
        page_items=matches[start : start + page_size],
        total_matches=len(matches),
        total_pages=total_pages,
        page_index=page,
        page_size=page_size,
    )
