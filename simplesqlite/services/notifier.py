"""
Operation Notifier
==================

Synchronous observer bus for completed write operations.

A notifier is an ordinary object owned by whoever creates it (usually a
``SQLiteOperations`` instance), so separate façades can have separate
observers.

Dispatch rules:
- handlers run on the calling thread, in registration order
- an empty notifier does nothing
- a handler that raises stops the dispatch and the exception reaches the
  caller of the write operation
"""

import logging
import threading
from typing import Any, Callable, List, Sequence

from simplesqlite.core.constants import SQLiteOperation

logger = logging.getLogger(__name__)

OperationHandler = Callable[[List[Any], str, SQLiteOperation], None]


class OperationNotifier:
    """
    Registry of handlers called after each successful write.

    Example:
        notifier = OperationNotifier()

        def audit(records, table_name, operation):
            print(f"{operation.value} on {table_name}: {len(records)} rows")

        notifier.subscribe(audit)
        ops = SQLiteOperations(notifier=notifier)
    """

    def __init__(self):
        self._handlers: List[OperationHandler] = []
        self._lock = threading.Lock()

    def subscribe(self, handler: OperationHandler) -> OperationHandler:
        """
        Register a handler.

        Returns the handler, so this can be used as a decorator. Registering
        the same handler twice makes it run twice.
        """
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")
        with self._lock:
            self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: OperationHandler) -> None:
        """Remove the earliest registration of ``handler``; unknown handlers are ignored."""
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass

    def clear(self) -> None:
        """Remove every registered handler."""
        with self._lock:
            self._handlers.clear()

    def publish(self, records: Sequence[Any], table_name: str, operation: SQLiteOperation) -> None:
        """Call every handler with the affected records, table name and operation."""
        with self._lock:
            handlers = list(self._handlers)

        if not handlers:
            return

        payload = list(records)
        logger.debug(
            "Publishing %s on %s (%d records) to %d handlers",
            operation.value, table_name, len(payload), len(handlers),
        )
        for handler in handlers:
            handler(payload, table_name, operation)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)
