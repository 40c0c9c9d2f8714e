"""
Database Session Management
============================

Handles database path resolution and the connection lifecycle.

Every public operation of the library gets its own engine and session for
exactly one database file. Nothing is pooled or kept between calls.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from simplesqlite.config import Settings, get_settings
from simplesqlite.core.constants import SQLITE_URL_PREFIX
from simplesqlite.core.errors import DatabaseDirectoryNotFoundError

logger = logging.getLogger(__name__)


def resolve_db_path(path: Optional[str] = "", settings: Optional[Settings] = None) -> str:
    """
    Resolve the database file a call should work on.

    Args:
        path: Absolute or relative path to the database file. Empty, blank or
            None selects the default file name in the current working directory.
        settings: Settings providing the default file name

    Returns:
        The absolute path of the database file

    Raises:
        DatabaseDirectoryNotFoundError: If the containing directory does not exist
    """
    settings = settings or get_settings()

    if path is None or not str(path).strip():
        db_path = os.path.abspath(settings.default_db_filename)
    else:
        db_path = os.path.abspath(os.path.expanduser(os.fspath(path)))

    directory = os.path.dirname(db_path)
    if not os.path.isdir(directory):
        raise DatabaseDirectoryNotFoundError(db_path, directory)

    return db_path


def create_db_engine(db_path: str, settings: Optional[Settings] = None) -> Engine:
    """Create and configure a single-use engine for ``db_path``."""
    settings = settings or get_settings()

    # NullPool: the DBAPI connection is really closed when the session ends
    engine = create_engine(
        f"{SQLITE_URL_PREFIX}{db_path}",
        poolclass=NullPool,
        echo=settings.echo_sql,
    )

    foreign_keys = settings.foreign_keys
    journal_mode = settings.journal_mode

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        if foreign_keys:
            cursor.execute("PRAGMA foreign_keys=ON")
        if journal_mode:
            cursor.execute(f"PRAGMA journal_mode={journal_mode}")
        cursor.close()

    return engine


@contextmanager
def open_session(path: Optional[str] = "", settings: Optional[Settings] = None) -> Generator[Session, None, None]:
    """
    Context manager for a one-shot database session.

    The path is resolved (and its directory checked) before any engine is
    created. The session commits when the block succeeds, rolls back when it
    raises, and the session and engine are always released.

    Usage:
        with open_session("./data/shop.db3") as db:
            db.add(product)
    """
    settings = settings or get_settings()
    db_path = resolve_db_path(path, settings)

    engine = create_db_engine(db_path, settings)
    # expire_on_commit=False keeps returned instances readable once detached
    db = Session(bind=engine, autoflush=False, expire_on_commit=False)
    logger.debug("Opened connection to %s", db_path)
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        engine.dispose()
        logger.debug("Closed connection to %s", db_path)
