"""Catalog, search and pagination core for the crypto icons viewer."""

__version__ = "0.1.0"
