"""Build an immutable :class:`Catalog` from a set of filenames."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import quote

from loguru import logger

from ..models.icon import Catalog, IconRecord
from .parser import is_icon_file, parse_filename

DEFAULT_RESOURCE_PREFIX = "/icons"


class DuplicateIdError(Exception):
    """Raised when two filenames resolve to the same icon id."""

    def __init__(self, icon_id: str, first: str, second: str) -> None:
        super().__init__(
            f"Icon id {icon_id!r} is produced by both {first!r} and {second!r}"
        )
        self.icon_id = icon_id
        self.first = first
        self.second = second


def resource_path_for(file_name: str, prefix: str = DEFAULT_RESOURCE_PREFIX) -> str:
    """Return the URL path the icon server exposes *file_name* under."""
    return f"{prefix.rstrip('/')}/{quote(file_name)}"


def build_catalog(
    file_names: Iterable[str],
    resource_prefix: str = DEFAULT_RESOURCE_PREFIX,
) -> Catalog:
    """Parse every ``.svg`` name in *file_names* into a :class:`Catalog`.

    Names without the icon extension are skipped.  Records are ordered by
    filename, case-insensitively.  A naming collision aborts the build
    with :class:`DuplicateIdError`.
    """
    names = sorted(set(file_names), key=lambda n: (n.casefold(), n))

    seen: dict[str, str] = {}
    records: list[IconRecord] = []
    skipped = 0
    for file_name in names:
        if not is_icon_file(file_name):
            skipped += 1
            continue
        parsed = parse_filename(file_name)
        if parsed.id in seen:
            raise DuplicateIdError(parsed.id, seen[parsed.id], file_name)
        seen[parsed.id] = file_name
        records.append(
            IconRecord(
                id=parsed.id,
                file_name=file_name,
                resource_path=resource_path_for(file_name, resource_prefix),
                display_name=parsed.display_name,
                symbol=parsed.symbol,
            )
        )

    if skipped:
        logger.debug(f"Ignored {skipped} non-icon file(s) while building catalog")
    logger.debug(f"Built catalog with {len(records)} icon(s)")
    return Catalog(icons=tuple(records))
