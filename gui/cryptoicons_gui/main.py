"""Crypto icons viewer GUI entry point."""

import sys

from loguru import logger
from PySide6.QtWidgets import QApplication

from cryptoicons.server.listing import start_icon_server
from cryptoicons.storage.cache import SvgCache
from cryptoicons.storage.config import load_settings
from cryptoicons.storage.preferences import PreferenceStore
from cryptoicons_gui.app import MainWindow
from cryptoicons_gui.widgets.svg_loader import configure_disk_cache


def main():
    settings = load_settings()

    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=settings.log_level, format="{time} {level} {message}")

    server = None
    base_url = settings.server_url
    if base_url:
        configure_disk_cache(SvgCache(base_url))
    else:
        # Local files need no disk cache.
        server = start_icon_server(
            settings.icon_dir,
            host=settings.host,
            port=settings.port,
            resource_prefix=settings.resource_prefix,
        )
        base_url = server.base_url

    app = QApplication(sys.argv)
    app.setApplicationName("cryptoicons-viewer")
    app.setApplicationDisplayName("Crypto Icons Viewer")

    window = MainWindow(settings, base_url, PreferenceStore())
    window.show()
    try:
        code = app.exec()
    finally:
        if server is not None:
            server.stop()
    sys.exit(code)


if __name__ == "__main__":
    main()
