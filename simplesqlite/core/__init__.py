"""Core constants and error types."""

from simplesqlite.core.constants import SQLiteOperation, DEFAULT_DB_FILENAME
from simplesqlite.core.errors import (
    SimpleSQLiteError,
    ConfigurationError,
    DatabaseDirectoryNotFoundError,
    InvalidModelError,
)

__all__ = [
    "SQLiteOperation",
    "DEFAULT_DB_FILENAME",
    "SimpleSQLiteError",
    "ConfigurationError",
    "DatabaseDirectoryNotFoundError",
    "InvalidModelError",
]
