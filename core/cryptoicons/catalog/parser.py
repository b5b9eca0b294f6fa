"""Turn icon filenames into display metadata.

Two naming schemes are understood:

* ``"Bitcoin (BTC).svg"`` -- a display name followed by a parenthesised
  ticker symbol.
* ``"crypto-name.svg"`` -- hyphen or space separated words.  The words are
  title-cased for display and the upper-cased base name doubles as an
  approximate symbol.
"""

from __future__ import annotations

import re

from ..models.icon import ParsedName

ICON_EXTENSION = ".svg"

_SYMBOL_PATTERN = re.compile(r"^(?P<name>.*?)\s*\((?P<symbol>[^()]*)\)$")
_WORD_SPLIT = re.compile(r"[-\s]+")


def is_icon_file(file_name: str) -> bool:
    """Return ``True`` for ``.svg`` names with a non-empty base name."""
    return (
        file_name.lower().endswith(ICON_EXTENSION)
        and len(file_name) > len(ICON_EXTENSION)
    )


def strip_extension(file_name: str) -> str:
    """Remove a trailing ``.svg`` (any case) from *file_name*."""
    if file_name.lower().endswith(ICON_EXTENSION):
        return file_name[: -len(ICON_EXTENSION)]
    return file_name


def humanize(base_name: str) -> str:
    """``"crypto-name"`` -> ``"Crypto Name"``.

    Only the first letter of each word is changed so acronyms such as
    ``"defi-DAO"`` keep their casing.
    """
    words = [w for w in _WORD_SPLIT.split(base_name) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def parse_filename(file_name: str) -> ParsedName:
    """Parse *file_name* into an id, display name and optional symbol."""
    base_name = strip_extension(file_name)
    if not base_name.strip():
        raise ValueError(f"Icon filename has an empty base name: {file_name!r}")

    match = _SYMBOL_PATTERN.match(base_name)
    if match:
        display_name = match.group("name").strip()
        symbol = match.group("symbol").strip()
        if display_name and symbol:
            return ParsedName(id=base_name, display_name=display_name, symbol=symbol)

    return ParsedName(
        id=base_name,
        display_name=humanize(base_name) or base_name.strip(),
        symbol=base_name.upper(),
    )
