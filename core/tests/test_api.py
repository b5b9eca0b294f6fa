"""Tests for API layer -- icon server client and catalog fetching."""
import httpx
import pytest

from cryptoicons.api.client import (
    CatalogLoadError,
    ClientClosedError,
    ContentFetchError,
    IconServerClient,
)
from cryptoicons.api.icons import fetch_catalog, get_icon_data, get_icon_markup
from cryptoicons.catalog.builder import DuplicateIdError


def _client(handler) -> IconServerClient:
    """Build a client whose transport is answered by *handler*."""
    client = IconServerClient("http://icons.test/")
    client._http.close()
    client._http = httpx.Client(
        base_url=client.base_url, transport=httpx.MockTransport(handler)
    )
    return client


def _listing(files=None, status=200, error=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/icons":
            body = {"error": error} if error else {"files": files or []}
            return httpx.Response(status, json=body)
        return httpx.Response(404)

    return handler


# =========================================================================
# IconServerClient
# =========================================================================


class TestListFiles:
    def test_returns_files(self):
        with _client(_listing(["Bitcoin (BTC).svg", "Zcash (ZEC).svg"])) as client:
            assert client.list_files() == ["Bitcoin (BTC).svg", "Zcash (ZEC).svg"]

    def test_base_url_trailing_slash_stripped(self):
        with _client(_listing()) as client:
            assert client.base_url == "http://icons.test"

    def test_server_error_uses_payload_message(self):
        handler = _listing(status=500, error="Failed to read icons directory")
        with _client(handler) as client:
            with pytest.raises(CatalogLoadError, match="HTTP error 500: Failed to read icons directory"):
                client.list_files()

    def test_non_json_error_uses_reason_phrase(self):
        def handler(request):
            return httpx.Response(503, text="down")

        with _client(handler) as client:
            with pytest.raises(CatalogLoadError, match="HTTP error 503: Service Unavailable"):
                client.list_files()

    def test_missing_files_key(self):
        def handler(request):
            return httpx.Response(200, json={"something": "else"})

        with _client(handler) as client:
            with pytest.raises(CatalogLoadError, match="malformed"):
                client.list_files()

    def test_non_json_success(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with _client(handler) as client:
            with pytest.raises(CatalogLoadError):
                client.list_files()

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client:
            with pytest.raises(CatalogLoadError, match="Could not reach"):
                client.list_files()


class TestFetchContent:
    def test_fetch_text_and_bytes(self):
        def handler(request):
            return httpx.Response(200, content=b"<svg>btc</svg>")

        with _client(handler) as client:
            assert client.fetch_text("/icons/Bitcoin%20%28BTC%29.svg") == "<svg>btc</svg>"
            assert client.fetch_bytes("/icons/Bitcoin%20%28BTC%29.svg") == b"<svg>btc</svg>"

    def test_missing_file_raises(self):
        with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(ContentFetchError):
                client.fetch_text("/icons/nope.svg")

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with _client(handler) as client:
            with pytest.raises(ContentFetchError):
                client.fetch_bytes("/icons/a.svg")


class TestClosedClient:
    def test_fetch_after_close(self):
        client = _client(lambda request: httpx.Response(200, content=b"<svg/>"))
        client.close()
        with pytest.raises(ContentFetchError, match="closed"):
            client.fetch_text("/icons/a.svg")
        with pytest.raises(ContentFetchError):
            client.fetch_bytes("/icons/a.svg")

    def test_list_after_close(self):
        client = _client(_listing(["a.svg"]))
        client.close()
        with pytest.raises(CatalogLoadError, match="closed"):
            client.list_files()

    def test_closed_during_request(self):
        """A worker racing close() still gets a ContentFetchError."""
        holder = {}

        def handler(request):
            holder["client"].close()
            raise RuntimeError("Cannot send a request, as the client has been closed.")

        client = _client(handler)
        holder["client"] = client
        with pytest.raises(ContentFetchError) as excinfo:
            client.fetch_bytes("/icons/a.svg")
        assert isinstance(excinfo.value.__cause__, ClientClosedError)

    def test_unrelated_runtime_error_propagates(self):
        def handler(request):
            raise RuntimeError("boom")

        with _client(handler) as client:
            with pytest.raises(RuntimeError, match="boom"):
                client.fetch_text("/icons/a.svg")


# =========================================================================
# Icon operations
# =========================================================================


class TestFetchCatalog:
    def test_builds_catalog_from_listing(self):
        files = ["Zcash (ZEC).svg", "Bitcoin (BTC).svg", "Ethereum (ETH).svg", "notes.txt"]
        with _client(_listing(files)) as client:
            catalog = fetch_catalog(client)
        assert catalog.ids == ["Bitcoin (BTC)", "Ethereum (ETH)", "Zcash (ZEC)"]

    def test_custom_prefix(self):
        with _client(_listing(["a.svg"])) as client:
            catalog = fetch_catalog(client, resource_prefix="/static")
        assert catalog.icons[0].resource_path == "/static/a.svg"

    def test_listing_failure_propagates(self):
        with _client(_listing(status=500, error="nope")) as client:
            with pytest.raises(CatalogLoadError):
                fetch_catalog(client)

    def test_duplicate_ids_propagate(self):
        with _client(_listing(["a.svg", "a.SVG"])) as client:
            with pytest.raises(DuplicateIdError):
                fetch_catalog(client)

    def test_icon_content_helpers(self, crypto_catalog):
        icon = crypto_catalog.get("Ethereum (ETH)")
        with _client(lambda request: httpx.Response(200, content=b"<svg/>")) as client:
            assert get_icon_markup(client, icon) == "<svg/>"
            assert get_icon_data(client, icon) == b"<svg/>"
