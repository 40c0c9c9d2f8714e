"""
Model Metadata Helpers
======================

Everything the library needs to know about a model class comes from its
SQLAlchemy mapper:

- the table name (label for operation observers)
- the tables to create before touching the model
- the primary key of an instance
- the relationships to eager load for "with children" reads
"""

from typing import Any, List, Optional, Tuple

from sqlalchemy import Table, inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper, RelationshipProperty, selectinload
from sqlalchemy.orm.interfaces import LoaderOption
from sqlalchemy.engine import Connection

from simplesqlite.core.errors import InvalidModelError


def get_mapper(model: Any) -> Mapper:
    """
    Return the mapper of a mapped class or of a mapped instance's class.

    Raises:
        InvalidModelError: If ``model`` is not mapped
    """
    target = model if isinstance(model, type) else type(model)
    try:
        mapper = sa_inspect(target)
    except NoInspectionAvailable:
        raise InvalidModelError(model) from None
    if not isinstance(mapper, Mapper):
        raise InvalidModelError(model)
    return mapper


def get_table_name(model: Any) -> str:
    """Name of the table a model class (or instance) is mapped to."""
    return get_mapper(model).local_table.name


def get_primary_key(item: Any) -> Tuple[Any, ...]:
    """Primary key values of a mapped instance, in column order."""
    return tuple(get_mapper(item).primary_key_from_instance(item))


def related_tables(model: Any) -> List[Table]:
    """
    Tables of the model plus every table reachable through its relationships.

    Secondary (association) tables of many-to-many relationships are included.
    """
    tables: List[Table] = []
    pending = [get_mapper(model)]
    seen = set()

    while pending:
        mapper = pending.pop()
        if mapper in seen:
            continue
        seen.add(mapper)

        for table in mapper.tables:
            if isinstance(table, Table) and table not in tables:
                tables.append(table)

        for rel in mapper.relationships:
            if isinstance(rel.secondary, Table) and rel.secondary not in tables:
                tables.append(rel.secondary)
            pending.append(rel.mapper)

    return tables


def ensure_schema(connection: Connection, model: Any) -> None:
    """Create the tables a model needs if they do not exist yet."""
    tables = related_tables(model)
    # create_all orders by foreign key dependency
    tables[0].metadata.create_all(bind=connection, tables=tables, checkfirst=True)


def relationship_loaders(
    model: Any,
    recursive: bool = False,
    _path: Optional[Tuple[RelationshipProperty, ...]] = None,
) -> List[LoaderOption]:
    """
    Build ``selectinload`` options for the relationships of a model.

    Args:
        model: Mapped class
        recursive: Also load the relationships of the related objects,
            transitively. A relationship already on the current loading path
            is not followed again, which stops back-reference cycles.

    Returns:
        Loader options for ``Session.get`` or ``select().options``
    """
    path = _path or ()
    loaders: List[LoaderOption] = []

    for rel in get_mapper(model).relationships:
        if rel in path:
            continue
        loader = selectinload(rel.class_attribute)
        if recursive:
            nested = relationship_loaders(rel.mapper.class_, recursive=True, _path=path + (rel,))
            if nested:
                loader = loader.options(*nested)
        loaders.append(loader)

    return loaders
