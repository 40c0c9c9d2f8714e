"""
Library-wide constants.

Centralize magic strings and default values here.
"""

from enum import Enum


# ========================================
# Write Operations
# ========================================

class SQLiteOperation(str, Enum):
    """
    Kind of write reported to operation observers.

    Usage:
        def on_write(records, table_name, operation):
            if operation is SQLiteOperation.DELETE:
                print(f"{len(records)} rows removed from {table_name}")
    """

    INSERT = "Insert"
    """Rows were added to the table."""

    UPDATE = "Update"
    """Existing rows were overwritten by primary key."""

    DELETE = "Delete"
    """Rows were removed (optionally with cascaded children)."""


# ========================================
# Database Files
# ========================================

DEFAULT_DB_FILENAME = "DB.db3"
SQLITE_URL_PREFIX = "sqlite:///"
