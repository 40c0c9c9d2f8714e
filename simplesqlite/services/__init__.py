"""
Services Package
================

- SQLiteOperations: model-generic CRUD façade
- OperationNotifier: observers for completed writes
"""

from simplesqlite.services.notifier import OperationNotifier, OperationHandler
from simplesqlite.services.operations import SQLiteOperations

__all__ = [
    "SQLiteOperations",
    "OperationNotifier",
    "OperationHandler",
]
