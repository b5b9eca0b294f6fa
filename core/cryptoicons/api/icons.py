"""Icon operations against the icon server.

Functions combining the raw client calls with catalog construction and
per-icon content retrieval.
"""

from __future__ import annotations

from loguru import logger

from ..catalog.builder import DEFAULT_RESOURCE_PREFIX, build_catalog
from ..models.icon import Catalog, IconRecord
from .client import IconServerClient


def fetch_catalog(
    client: IconServerClient,
    resource_prefix: str = DEFAULT_RESOURCE_PREFIX,
) -> Catalog:
    """List the server's icon files and build a :class:`Catalog` from them.

    Raises :class:`~cryptoicons.api.client.CatalogLoadError` when listing
    fails and :class:`~cryptoicons.catalog.builder.DuplicateIdError` when
    two files resolve to the same icon id.
    """
    file_names = client.list_files()
    catalog = build_catalog(file_names, resource_prefix=resource_prefix)
    logger.info(f"Loaded {len(catalog)} icon(s) from {client.base_url}")
    return catalog


def get_icon_markup(client: IconServerClient, icon: IconRecord) -> str:
    """Return the raw SVG markup for *icon*."""
    return client.fetch_text(icon.resource_path)


def get_icon_data(client: IconServerClient, icon: IconRecord) -> bytes:
    """Return the raw file bytes for *icon*."""
    return client.fetch_bytes(icon.resource_path)
