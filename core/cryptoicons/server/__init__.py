"""Local icon file-listing server."""

from cryptoicons.server.listing import IconServer, list_icon_files, start_icon_server

__all__ = ["IconServer", "list_icon_files", "start_icon_server"]
