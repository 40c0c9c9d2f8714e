"""
Test path resolution and the per-call connection lifecycle
"""

import os

import pytest
from sqlalchemy import text
from sqlalchemy.engine import Engine

from simplesqlite.config import Settings
from simplesqlite.core.errors import ConfigurationError, DatabaseDirectoryNotFoundError
from simplesqlite.database import session as session_module
from simplesqlite.database.session import create_db_engine, open_session, resolve_db_path


@pytest.mark.parametrize("blank", ["", "   ", "\t", None])
def test_blank_path_resolves_to_default_file(blank, settings, tmp_path, monkeypatch):
    """Test that a blank path selects the default file in the working directory"""
    monkeypatch.chdir(tmp_path)

    resolved = resolve_db_path(blank, settings)

    assert resolved == os.path.join(os.getcwd(), "DB.db3")
    assert os.path.isabs(resolved)


def test_relative_path_is_made_absolute(settings, tmp_path, monkeypatch):
    """Test that relative paths are resolved against the working directory"""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()

    resolved = resolve_db_path("./data/shop.db3", settings)

    assert resolved == os.path.join(os.getcwd(), "data", "shop.db3")


def test_absolute_path_is_kept(settings, db_path):
    assert resolve_db_path(db_path, settings) == db_path


def test_missing_directory_raises_configuration_error(settings, missing_dir_path):
    """Test the directory precondition"""
    with pytest.raises(DatabaseDirectoryNotFoundError) as exc_info:
        resolve_db_path(missing_dir_path, settings)

    error = exc_info.value
    assert isinstance(error, ConfigurationError)
    assert error.code == "database_directory_not_found"
    assert error.db_path == missing_dir_path
    assert error.directory == os.path.dirname(missing_dir_path)
    assert "does not exist" in error.message
    assert error.to_dict()["error"]["details"]["directory"] == error.directory


def test_missing_directory_never_creates_engine(settings, missing_dir_path, monkeypatch):
    """Test that no connection is attempted when the directory is missing"""
    def fail(*args, **kwargs):
        raise AssertionError("engine must not be created")

    monkeypatch.setattr(session_module, "create_db_engine", fail)

    with pytest.raises(DatabaseDirectoryNotFoundError):
        with open_session(missing_dir_path, settings):
            pass

    assert not os.path.exists(os.path.dirname(missing_dir_path))


def test_engine_applies_configured_pragmas(settings, db_path):
    """Test that every connection enables foreign keys and the journal mode when asked"""
    settings = settings.model_copy(update={"foreign_keys": True, "journal_mode": "WAL"})
    engine = create_db_engine(db_path, settings)
    try:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
            assert conn.execute(text("PRAGMA journal_mode")).scalar().upper() == "WAL"
    finally:
        engine.dispose()


def test_engine_leaves_pragmas_alone_by_default(db_path):
    """Test that a default engine neither enforces foreign keys nor changes the journal"""
    settings = Settings(_env_file=None, foreign_keys=False, journal_mode="")
    engine = create_db_engine(db_path, settings)
    try:
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 0
            assert conn.execute(text("PRAGMA journal_mode")).scalar().upper() == "DELETE"
    finally:
        engine.dispose()


def test_session_commits_on_success(settings, db_path):
    with open_session(db_path, settings) as db:
        db.execute(text("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)"))
        db.execute(text("INSERT INTO notes (body) VALUES ('kept')"))

    with open_session(db_path, settings) as db:
        assert db.execute(text("SELECT body FROM notes")).scalars().all() == ["kept"]


def test_session_rolls_back_on_error(settings, db_path):
    with open_session(db_path, settings) as db:
        db.execute(text("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT)"))

    with pytest.raises(RuntimeError):
        with open_session(db_path, settings) as db:
            db.execute(text("INSERT INTO notes (body) VALUES ('lost')"))
            raise RuntimeError("boom")

    with open_session(db_path, settings) as db:
        assert db.execute(text("SELECT COUNT(*) FROM notes")).scalar() == 0


def test_engine_is_disposed_after_each_call(settings, db_path, monkeypatch):
    """Test that the connection is released on success and on failure"""
    disposed = []
    real_dispose = Engine.dispose

    def tracking_dispose(self, *args, **kwargs):
        disposed.append(self.url.database)
        return real_dispose(self, *args, **kwargs)

    monkeypatch.setattr(Engine, "dispose", tracking_dispose)

    with open_session(db_path, settings):
        pass
    with pytest.raises(ValueError):
        with open_session(db_path, settings):
            raise ValueError("fail inside the session")

    assert disposed == [db_path, db_path]
