"""
conftest.py
-----------
Shared pytest fixtures for entrybox tests.

Provides fixtures for:
- Temporary SQLite databases migrated to head
- Sessions bound to a session_scope
- Manager instances sharing that session
- Small entry factories
"""
import time
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from entrybox.dataclasses import NewEntry


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Create temporary test database path."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db_url(test_db_path):
    return f"sqlite:///{test_db_path}"


# ----- Database Fixtures -----

@pytest.fixture
def test_db(test_db_url):
    """
    Create test database instance with schema.

    Returns an EntryBoxDB on a fresh SQLite file, migrated to head.
    The engine is disposed after the test.
    """
    from entrybox.database.manager import EntryBoxDB

    db = EntryBoxDB(test_db_url)
    yield db
    db.dispose()


@pytest.fixture
def db_session(test_db):
    """Session of an open session_scope; managers on test_db are bound to it."""
    with test_db.session_scope() as session:
        yield session


@pytest.fixture
def dialect(test_db):
    return test_db.backend.dialect


@pytest.fixture
def entry_manager(db_session, dialect):
    """Create EntryManager instance for testing."""
    from entrybox.database.managers import EntryManager
    return EntryManager(db_session, dialect)


@pytest.fixture
def tag_manager(db_session, dialect):
    """Create TagManager instance for testing."""
    from entrybox.database.managers import TagManager
    return TagManager(db_session, dialect)


@pytest.fixture
def category_manager(db_session, dialect):
    """Create CategoryManager instance for testing."""
    from entrybox.database.managers import CategoryManager
    return CategoryManager(db_session, dialect)


# ----- Data Factories -----

@pytest.fixture
def make_entry(entry_manager):
    """
    Factory creating entries through the EntryManager.

    Sleeps briefly after each insert so consecutive entries get distinct
    millisecond timestamps.
    """

    def _make(title="Read Pluto vol.1", kind="manga", **kwargs):
        entry = entry_manager.create(NewEntry(title=title, kind=kind, **kwargs))
        time.sleep(0.01)
        return entry

    return _make
