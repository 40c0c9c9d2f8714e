"""
SQLite Operations
=================

Model-generic CRUD over a SQLite database file.

Every method is self-contained:

    resolve path -> open connection -> ensure tables -> act -> commit -> close

and every write publishes ``(records, table_name, operation)`` to the
façade's ``OperationNotifier`` once the transaction has committed.

Any SQLAlchemy declarative model works. Relationships declared with
``relationship()`` are what "with children" reads, ``fill_with_children``
and recursive deletes follow.

Example:
    ops = SQLiteOperations()
    ops.notifier.subscribe(lambda records, table, op: print(op.value, table))

    ops.insert_all(Product, [Product(name="refrescos", price=20)], "./shop.db3")
    expensive = ops.read_all(Product, lambda p: p.price >= 25, "./shop.db3")
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Generator, Iterable, List, Optional, Type, TypeVar, Union

from sqlalchemy import and_, delete, func, inspect as sa_inspect, select
from sqlalchemy.orm import Session, make_transient
from sqlalchemy.orm.attributes import set_committed_value
from sqlalchemy.sql.expression import ClauseElement, ColumnElement

from simplesqlite.config import Settings, get_settings
from simplesqlite.core.constants import SQLiteOperation
from simplesqlite.database.schema import (
    ensure_schema,
    get_mapper,
    get_primary_key,
    get_table_name,
    relationship_loaders,
)
from simplesqlite.database.session import open_session
from simplesqlite.services.notifier import OperationNotifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

Predicate = Union[ColumnElement[bool], Callable[[Any], ColumnElement[bool]]]


def _where_clause(model: Type[T], predicate: Optional[Predicate]):
    """Turn a predicate (expression or ``lambda model: expression``) into a WHERE clause."""
    if predicate is None:
        return None
    if callable(predicate) and not isinstance(predicate, ClauseElement):
        return predicate(model)
    return predicate


class SQLiteOperations:
    """
    Data access façade over SQLite files.

    Args:
        notifier: Observer bus for completed writes. A private one is
            created when omitted.
        settings: Library settings (default file name, pragmas, echo).
    """

    def __init__(self, notifier: Optional[OperationNotifier] = None,
                 settings: Optional[Settings] = None):
        self.notifier = notifier if notifier is not None else OperationNotifier()
        self.settings = settings or get_settings()

    # ========================================
    # Queries
    # ========================================

    def count(self, model: Type[T], path: str = "", predicate: Optional[Predicate] = None) -> int:
        """
        Count the rows of a model's table.

        Args:
            model: Mapped model class
            path: Database file (blank for the default file)
            predicate: Optional filter, e.g. ``Product.price > 20``

        Returns:
            Number of matching rows (0 for an empty table)
        """
        with self._session(model, path) as db:
            stmt = select(func.count()).select_from(model)
            where = _where_clause(model, predicate)
            if where is not None:
                stmt = stmt.where(where)
            return db.scalar(stmt)

    def read(self, model: Type[T], primary_key: Any, path: str = "",
             with_children: bool = False, recursive: bool = False) -> Optional[T]:
        """
        Fetch one row by primary key.

        Args:
            model: Mapped model class
            primary_key: Key value (tuple for composite keys)
            path: Database file
            with_children: Also load the model's relationships
            recursive: Load relationships of the related objects too

        Returns:
            The instance, or None if no row has that key
        """
        options = relationship_loaders(model, recursive=recursive) if with_children else []

        with self._session(model, path) as db:
            return db.get(model, primary_key, options=options)

    def read_all(self, model: Type[T], predicate: Optional[Predicate] = None,
                 path: str = "") -> List[T]:
        """
        Fetch every row, or the rows matching ``predicate``.

        The result is a fully loaded list; nothing is read after the
        connection closes.
        """
        with self._session(model, path) as db:
            stmt = select(model)
            where = _where_clause(model, predicate)
            if where is not None:
                stmt = stmt.where(where)
            return list(db.scalars(stmt).all())

    def fill_with_children(self, item: T, path: str = "", recursive: bool = False) -> None:
        """
        Populate the relationship attributes of ``item`` in place.

        Column attributes of ``item`` are left untouched. Nothing is
        published, this is a read.
        """
        model = type(item)
        mapper = get_mapper(model)
        key = get_primary_key(item)

        with self._session(model, path) as db:
            stored = db.get(model, key, options=relationship_loaders(model, recursive=recursive))

        if stored is None:
            logger.debug("No %s row with key %r, nothing to fill", mapper.local_table.name, key)
            return

        for rel in mapper.relationships:
            set_committed_value(item, rel.key, getattr(stored, rel.key))

    # ========================================
    # Writes
    # ========================================

    def insert(self, item: T, path: str = "") -> None:
        """
        Insert one row, then publish ``INSERT``.

        An instance that was already stored (returned by an earlier insert
        or read) is inserted again as a new row: its autoincrement key is
        cleared and reassigned. Without an autoincrement key the duplicate
        key error from SQLite is raised.
        """
        model = type(item)
        with self._session(model, path) as db:
            self._add_new(db, item)
        self._publish(model, [item], SQLiteOperation.INSERT)

    def insert_all(self, model: Type[T], items: Iterable[T], path: str = "") -> None:
        """
        Insert several rows in one transaction, then publish ``INSERT`` once.

        An empty collection still publishes, with no records.
        """
        items = list(items)
        with self._session(model, path) as db:
            for item in items:
                self._add_new(db, item)
        self._publish(model, items, SQLiteOperation.INSERT)

    def update(self, item: T, path: str = "") -> None:
        """Write an already-modified instance to its row, then publish ``UPDATE``."""
        model = type(item)
        with self._session(model, path) as db:
            self._update_one(db, item)
        self._publish(model, [item], SQLiteOperation.UPDATE)

    def update_all(self, model: Type[T], items: Iterable[T], path: str = "") -> None:
        """Write several modified instances in one transaction, then publish ``UPDATE`` once."""
        items = list(items)
        with self._session(model, path) as db:
            for item in items:
                self._update_one(db, item)
        self._publish(model, items, SQLiteOperation.UPDATE)

    def delete(self, item: T, path: str = "", recursive: bool = False) -> None:
        """
        Delete the row of ``item``, then publish ``DELETE``.

        Args:
            item: Instance whose primary key selects the row
            path: Database file
            recursive: Delete through the ORM so the relationship cascades
                declared on the model (``cascade="all, delete-orphan"``)
                remove child rows as well. Otherwise only this row is deleted.
        """
        model = type(item)
        with self._session(model, path) as db:
            self._delete_one(db, model, item, recursive)
        self._publish(model, [item], SQLiteOperation.DELETE)

    def delete_all(self, model: Type[T], items: Iterable[T], path: str = "",
                   recursive: bool = False) -> None:
        """
        Delete several rows, one by one, in a single transaction.

        The first failing element stops the loop and the whole transaction
        is rolled back, so either every row is deleted or none is.
        """
        items = list(items)
        with self._session(model, path) as db:
            for item in items:
                self._delete_one(db, model, item, recursive)
        self._publish(model, items, SQLiteOperation.DELETE)

    # ========================================
    # Helpers
    # ========================================

    def table_name(self, model: Any) -> str:
        """Table name of a model class or instance, as published to observers."""
        return get_table_name(model)

    @contextmanager
    def _session(self, model: Any, path: str) -> Generator[Session, None, None]:
        """Open a one-shot session and make sure the model's tables exist."""
        get_mapper(model)
        with open_session(path, self.settings) as db:
            ensure_schema(db.connection(), model)
            yield db

    def _publish(self, model: Any, records: List[Any], operation: SQLiteOperation) -> None:
        table_name = get_table_name(model)
        logger.debug("%s committed on %s (%d records)", operation.value, table_name, len(records))
        self.notifier.publish(records, table_name, operation)

    def _add_new(self, db: Session, item: Any) -> None:
        state = sa_inspect(item)
        if state.persistent or state.detached:
            # Stored before: insert a copy of its values as a new row
            make_transient(item)
            mapper = get_mapper(item)
            column = mapper.local_table.autoincrement_column
            if column is not None:
                setattr(item, mapper.get_property_by_column(column).key, None)
        db.add(item)

    def _update_one(self, db: Session, item: Any) -> None:
        merged = db.merge(item)
        if sa_inspect(merged).pending:
            # No row with this key: updates never insert
            db.expunge(merged)
            logger.warning(
                "No %s row with key %r, update skipped",
                get_table_name(item), get_primary_key(item),
            )

    def _delete_one(self, db: Session, model: Any, item: Any, recursive: bool) -> None:
        key = get_primary_key(item)

        if recursive:
            stored = db.get(model, key)
            if stored is None:
                return
            db.delete(stored)
            db.flush()
            return

        mapper = get_mapper(model)
        condition = and_(*[column == value for column, value in zip(mapper.primary_key, key)])
        db.execute(delete(mapper.local_table).where(condition))

