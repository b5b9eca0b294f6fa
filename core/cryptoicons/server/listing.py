"""Local HTTP server that lists and serves the icon directory.

Endpoints
---------
``GET /api/icons``
    ``200 {"files": [...]}`` with every ``.svg`` filename in the directory,
    or ``500 {"error": "..."}`` if the directory cannot be read.
``GET /icons/<file>``
    The raw icon file.

Any other method is answered with ``405 Method Not Allowed``.
"""

from __future__ import annotations

import http.server
import json
import os
import threading
from functools import partial
from pathlib import Path
from urllib.parse import urlsplit

from loguru import logger

from ..catalog.builder import DEFAULT_RESOURCE_PREFIX
from ..catalog.parser import is_icon_file

LIST_PATH = "/api/icons"


def list_icon_files(directory: Path | str) -> list[str]:
    """Return the sorted ``.svg`` filenames directly inside *directory*.

    Raises :class:`OSError` if the directory cannot be read.
    """
    with os.scandir(directory) as entries:
        names = [e.name for e in entries if e.is_file() and is_icon_file(e.name)]
    return sorted(names, key=str.casefold)


class IconRequestHandler(http.server.SimpleHTTPRequestHandler):
    """Serve the icon listing and the icon files themselves."""

    def __init__(self, *args, resource_prefix: str = DEFAULT_RESOURCE_PREFIX, **kwargs):
        self.resource_prefix = resource_prefix.rstrip("/")
        super().__init__(*args, **kwargs)

    # -- GET ----------------------------------------------------------------

    def do_GET(self) -> None:  # noqa: N802
        path = urlsplit(self.path).path
        if path == LIST_PATH:
            self._send_listing()
            return

        prefix = self.resource_prefix + "/"
        if path.startswith(prefix) and len(path) > len(prefix):
            self.path = "/" + path[len(prefix):]
            if os.path.isfile(self.translate_path(self.path)):
                super().do_GET()
                return
        self.send_error(404, "Not Found")

    def _send_listing(self) -> None:
        try:
            files = list_icon_files(self.directory)
        except OSError as exc:
            logger.error(f"Failed to read icons directory {self.directory}: {exc}")
            self._send_json(500, {"error": "Failed to read icons directory"})
            return
        self._send_json(200, {"files": files})

    def _send_json(self, status: int, payload: dict) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    # -- everything else ----------------------------------------------------

    def _method_not_allowed(self) -> None:
        body = f"Method {self.command} Not Allowed".encode("utf-8")
        self.send_response(405)
        self.send_header("Allow", "GET")
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    do_POST = do_PUT = do_PATCH = do_DELETE = do_HEAD = _method_not_allowed

    def log_message(self, format, *args) -> None:  # noqa: A002
        logger.debug(f"{self.address_string()} - {format % args}")


class IconServer:
    """A running icon server; stop it with :meth:`stop`."""

    def __init__(self, httpd: http.server.ThreadingHTTPServer, thread: threading.Thread) -> None:
        self._httpd = httpd
        self._thread = thread

    @property
    def base_url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def stop(self) -> None:
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join(timeout=5)
        logger.debug("Icon server stopped")


def start_icon_server(
    directory: Path | str,
    host: str = "127.0.0.1",
    port: int = 0,
    resource_prefix: str = DEFAULT_RESOURCE_PREFIX,
) -> IconServer:
    """Serve *directory* on a background daemon thread.

    Port ``0`` picks a free port; read it back from
    :attr:`IconServer.base_url`.
    """
    handler = partial(
        IconRequestHandler, directory=str(directory), resource_prefix=resource_prefix
    )
    httpd = http.server.ThreadingHTTPServer((host, port), handler)
    httpd.daemon_threads = True
    thread = threading.Thread(target=httpd.serve_forever, name="icon-server", daemon=True)
    thread.start()
    server = IconServer(httpd, thread)
    logger.info(f"Serving icons from {directory} at {server.base_url}")
    return server
