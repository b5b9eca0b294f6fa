"""PySide6 shell for the crypto icons viewer."""
