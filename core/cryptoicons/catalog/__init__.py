"""Catalog construction and querying -- re-exports the public functions."""

from cryptoicons.catalog.builder import DuplicateIdError, build_catalog
from cryptoicons.catalog.parser import parse_filename
from cryptoicons.catalog.query import FilteredView, query

__all__ = [
    "DuplicateIdError",
    "FilteredView",
    "build_catalog",
    "parse_filename",
    "query",
]
