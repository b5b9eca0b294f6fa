"""HTTP client for the icon server."""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import ValidationError

from ..models.icon import IconListResponse


class CatalogLoadError(Exception):
    """Raised when the list of icon files cannot be obtained."""


class ContentFetchError(Exception):
    """Raised when the raw content of a single icon cannot be fetched."""


class ClientClosedError(RuntimeError):
    """Raised when a request is made after :meth:`IconServerClient.close`."""


class IconServerClient:
    """Thin wrapper around :class:`httpx.Client` for the icon server.

    The server exposes ``GET /api/icons`` returning ``{"files": [...]}``
    and serves the icon files themselves under a resource prefix
    (``/icons/<file>`` by default).

    Example::

        with IconServerClient("http://127.0.0.1:8000") as client:
            names = client.list_files()
            markup = client.fetch_text("/icons/Bitcoin%20(BTC).svg")
    """

    LIST_PATH = "/api/icons"

    def __init__(self, base_url: str, timeout: float = 15.0) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout)

    def _get(self, path: str) -> httpx.Response:
        if self._http.is_closed:
            raise ClientClosedError("Icon server client is closed")
        try:
            return self._http.get(path)
        except RuntimeError as exc:
            # httpx raises a bare RuntimeError when closed mid-request
            if self._http.is_closed:
                raise ClientClosedError("Icon server client is closed") from exc
            raise

    # ------------------------------------------------------------------
    # File listing
    # ------------------------------------------------------------------

    def list_files(self) -> list[str]:
        """Return the filenames the server reports as available icons.

        Raises :class:`CatalogLoadError` on transport failures, non-2xx
        responses, or a payload without a ``files`` list.
        """
        try:
            resp = self._get(self.LIST_PATH)
        except (httpx.HTTPError, ClientClosedError) as exc:
            raise CatalogLoadError(f"Could not reach icon server: {exc}") from exc

        payload = None
        try:
            payload = IconListResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            pass

        if resp.is_error:
            detail = payload.error if payload and payload.error else resp.reason_phrase
            raise CatalogLoadError(f"HTTP error {resp.status_code}: {detail}")
        if payload is None or payload.files is None:
            raise CatalogLoadError("Icon server returned a malformed file list")

        logger.debug(f"Icon server listed {len(payload.files)} file(s)")
        return payload.files

    # ------------------------------------------------------------------
    # Icon content
    # ------------------------------------------------------------------

    def _fetch(self, resource_path: str) -> httpx.Response:
        try:
            resp = self._get(resource_path)
            resp.raise_for_status()
        except (httpx.HTTPError, ClientClosedError) as exc:
            raise ContentFetchError(f"Failed to fetch {resource_path}: {exc}") from exc
        return resp

    def fetch_text(self, resource_path: str) -> str:
        """Return the SVG markup at *resource_path* as text."""
        return self._fetch(resource_path).text

    def fetch_bytes(self, resource_path: str) -> bytes:
        """Return the raw bytes at *resource_path*."""
        return self._fetch(resource_path).content

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        self._http.close()

    def __enter__(self) -> IconServerClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()
