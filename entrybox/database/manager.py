#!/usr/bin/env python3
"""
manager.py
--------------------
Main entry point to the entrybox data layer.

EntryBoxDB owns the Backend (engine, pool, dialect) for the life of the
process and hands out transactional sessions. Inside a session_scope the
entry, tag and category managers are bound to that session and reachable
as properties.

The binding lives in a ContextVar, so every thread (or asyncio task) sees
only the scope it opened itself. A scope opened inside another shadows it
until it exits, then the outer managers are visible again.

Usage:
    db = EntryBoxDB("sqlite:///data/entrybox.db", log_dir="logs")
    with db.session_scope():
        entry = db.entries.create(NewEntry(title="Pluto", kind="manga"))
        db.tags.get_all()
    db.dispose()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

# --- Third party imports ---
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# --- Local imports ---
from entrybox.core.exceptions import DatabaseError
from entrybox.core.logging_manager import EntryBoxLogger

from .backend import Backend, connect_backend
from .managers import CategoryManager, EntryManager, TagManager
from .migration_runner import MigrationRunner


@dataclass(frozen=True)
class ScopeManagers:
    """Managers bound to the session of one session_scope."""

    session: Session
    entries: EntryManager
    tags: TagManager
    categories: CategoryManager


class EntryBoxDB:
    """
    Database facade for entrybox.

    Attributes:
        database_url: Descriptor with the password masked
        backend: Initialized Backend
        logger: EntryBoxLogger when a log directory was given, else None
    """

    def __init__(
        self,
        database_url: str,
        log_dir: Optional[Union[str, Path]] = None,
        migrate: bool = True,
    ) -> None:
        """
        Connect to the backend and apply pending migrations.

        Args:
            database_url: Connection descriptor ('sqlite:...' or a PostgreSQL URL)
            log_dir: Directory for log files (optional)
            migrate: Apply pending migrations on startup

        Raises:
            ConnectionError: Malformed descriptor or unreachable backend
            MigrationError: Schema application failed
        """
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger: Optional[EntryBoxLogger] = EntryBoxLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.log_dir = None
            self.logger = None

        self.backend: Backend = connect_backend(database_url, self.logger, migrate)
        self.database_url = self.backend.url

        self._scope: ContextVar[Optional[ScopeManagers]] = ContextVar(
            f"entrybox_scope_{id(self)}", default=None
        )

    @property
    def backend_name(self) -> str:
        return self.backend.name

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Transactional scope with managers bound to its session.

        Commits on success, rolls back on any exception. Backend errors
        raised while committing surface as DatabaseError.

        Usage:
            with db.session_scope():
                db.entries.get(entry_id)
        """
        session = self.backend.session_factory()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        dialect = self.backend.dialect

        token = self._scope.set(
            ScopeManagers(
                session=session,
                entries=EntryManager(session, dialect, self.logger),
                tags=TagManager(session, dialect, self.logger),
                categories=CategoryManager(session, dialect, self.logger),
            )
        )

        if self.logger:
            self.logger.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            try:
                session.commit()
            except SQLAlchemyError as e:
                raise DatabaseError("Transaction commit failed") from e
            if self.logger:
                self.logger.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            if self.logger:
                self.logger.log_error(
                    e, {"operation": "session_rollback", "session_id": session_id}
                )
            raise
        finally:
            self._scope.reset(token)
            session.close()
            if self.logger:
                self.logger.log_debug("session_close", {"session_id": session_id})

    # ---- Managers ----
    def _require(self, name: str) -> ScopeManagers:
        scope = self._scope.get()
        if scope is None:
            raise DatabaseError(
                f"{name} requires an active session. "
                "Use within session_scope: with db.session_scope(): ..."
            )
        return scope

    @property
    def entries(self) -> EntryManager:
        """EntryManager bound to the innermost session_scope of this context."""
        return self._require("EntryManager").entries

    @property
    def tags(self) -> TagManager:
        """TagManager bound to the innermost session_scope of this context."""
        return self._require("TagManager").tags

    @property
    def categories(self) -> CategoryManager:
        """CategoryManager bound to the innermost session_scope of this context."""
        return self._require("CategoryManager").categories

    # ---- Health & migrations ----
    def health_check(self) -> Dict[str, str]:
        """
        Ping the backend.

        Returns:
            {"status": "ok" | "degraded", "database": "<backend name>"}
        """
        try:
            self.backend.ping()
            status = "ok"
        except SQLAlchemyError as e:
            if self.logger:
                self.logger.log_error(e, {"operation": "health_check"})
            status = "degraded"
        return {"status": status, "database": self.backend_name}

    def _migration_runner(self) -> MigrationRunner:
        return MigrationRunner(self.backend.engine, self.backend.kind, self.logger)

    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the schema to the given revision.

        Raises:
            MigrationError: If the upgrade fails
        """
        self._migration_runner().upgrade(revision)

    def get_migration_history(self) -> Dict[str, Any]:
        """
        Migration status of the database.

        Returns:
            Dictionary with keys:
                - 'backend': backend name
                - 'current_revision': stamped revision or None
                - 'head_revision': newest available revision
                - 'status': 'up_to_date' or 'needs_migration'
                - 'revisions': available revisions, oldest first
        """
        runner = self._migration_runner()
        current = runner.current_revision()
        head = runner.head_revision()
        revisions: List[Dict[str, Any]] = runner.history()
        return {
            "backend": self.backend_name,
            "current_revision": current,
            "head_revision": head,
            "status": "up_to_date" if current == head else "needs_migration",
            "revisions": revisions,
        }

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.backend.dispose()
        if self.logger:
            self.logger.log_debug("engine_disposed", {"backend": self.backend_name})

    def __enter__(self) -> "EntryBoxDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.dispose()
