"""Database package."""

from simplesqlite.database.session import (
    resolve_db_path,
    create_db_engine,
    open_session,
)
from simplesqlite.database.schema import (
    get_mapper,
    get_table_name,
    get_primary_key,
    related_tables,
    ensure_schema,
    relationship_loaders,
)

__all__ = [
    "resolve_db_path",
    "create_db_engine",
    "open_session",
    "get_mapper",
    "get_table_name",
    "get_primary_key",
    "related_tables",
    "ensure_schema",
    "relationship_loaders",
]
