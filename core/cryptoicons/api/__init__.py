"""Icon server client layer -- re-exports the primary client class."""

from cryptoicons.api.client import (
    CatalogLoadError,
    ClientClosedError,
    ContentFetchError,
    IconServerClient,
)

__all__ = ["CatalogLoadError", "ClientClosedError", "ContentFetchError", "IconServerClient"]
