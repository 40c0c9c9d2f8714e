"""
SimpleSQLite
============

Model-generic CRUD helpers over SQLite files, built on SQLAlchemy.

Usage:
    from simplesqlite import SQLiteOperations, SQLiteOperation

    ops = SQLiteOperations()
    ops.insert(Product(name="jugos", price=25), "./shop.db3")
"""

from simplesqlite.core.constants import SQLiteOperation
from simplesqlite.core.errors import (
    SimpleSQLiteError,
    ConfigurationError,
    DatabaseDirectoryNotFoundError,
    InvalidModelError,
)
from simplesqlite.services.notifier import OperationNotifier
from simplesqlite.services.operations import SQLiteOperations

__version__ = "0.1.0"

__all__ = [
    "SQLiteOperations",
    "OperationNotifier",
    "SQLiteOperation",
    "SimpleSQLiteError",
    "ConfigurationError",
    "DatabaseDirectoryNotFoundError",
    "InvalidModelError",
]
