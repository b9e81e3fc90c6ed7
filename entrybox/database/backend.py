#!/usr/bin/env python3
"""
backend.py
--------------------
Backend selection and initialization.

A connection descriptor starting with ``sqlite:`` selects the embedded
engine; anything else is a PostgreSQL URL driven through psycopg. The
returned Backend carries the engine, the session factory and the
QueryDialect strategy, tagged with the BackendKind that picked them.

Pool policy:
    - SQLite file: 5 connections, no overflow
    - SQLite in-memory: one shared connection (StaticPool)
    - PostgreSQL: 10 connections, no overflow

Callers beyond the ceiling wait in the SQLAlchemy pool.

Usage:
    backend = connect_backend("sqlite:///data/entrybox.db", logger)
    with backend.session_factory() as session:
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

# --- Third party imports ---
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from entrybox.core.exceptions import ConnectionError
from entrybox.core.logging_manager import EntryBoxLogger, safe_logger

from .dialects import QueryDialect, dialect_for
from .migration_runner import MigrationRunner

SQLITE_PREFIX = "sqlite:"
POSTGRES_DRIVER = "postgresql+psycopg"


class BackendKind(str, Enum):
    """The two supported storage engines."""

    SQLITE = "sqlite"
    POSTGRES = "postgres"

    @property
    def pool_size(self) -> int:
        return 5 if self is BackendKind.SQLITE else 10


@dataclass(frozen=True)
class Backend:
    """
    Ready-to-use storage handle.

    Attributes:
        kind: Which engine this is
        engine: SQLAlchemy engine owning the connection pool
        dialect: Query-building strategy matching ``kind``
        session_factory: sessionmaker bound to ``engine``
        url: Descriptor with the password masked, safe to log
    """

    kind: BackendKind
    engine: Engine
    dialect: QueryDialect
    session_factory: sessionmaker
    url: str

    @property
    def name(self) -> str:
        return self.kind.value

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def select_backend_kind(database_url: str) -> BackendKind:
    """
    Pick the engine for a descriptor.

    Examples:
        >>> select_backend_kind("sqlite:///tmp/x.db")
        <BackendKind.SQLITE: 'sqlite'>
        >>> select_backend_kind("postgres://user@host/db")
        <BackendKind.POSTGRES: 'postgres'>
    """
    if database_url.strip().startswith(SQLITE_PREFIX):
        return BackendKind.SQLITE
    return BackendKind.POSTGRES


def normalize_database_url(database_url: str) -> str:
    """
    Rewrite bare PostgreSQL schemes to the psycopg driver form.

    Examples:
        >>> normalize_database_url("postgres://u:p@db:5432/box")
        'postgresql+psycopg://u:p@db:5432/box'
    """
    url = database_url.strip()
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return f"{POSTGRES_DRIVER}://{url[len(scheme):]}"
    return url


def _is_memory_sqlite(url: URL) -> bool:
    database = url.database or ""
    return database in ("", ":memory:") or url.query.get("mode") == "memory"


def _engine_options(kind: BackendKind, url: URL) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": False, "future": True, "pool_pre_ping": True}
    if kind is BackendKind.SQLITE and _is_memory_sqlite(url):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = kind.pool_size
        options["max_overflow"] = 0
    return options


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_backend_engine(database_url: str) -> Tuple[BackendKind, Engine]:
    """
    Build the engine for a descriptor without touching the backend.

    Raises:
        ConnectionError: If the descriptor is malformed or its driver is missing
    """
    kind = select_backend_kind(database_url)
    try:
        url = make_url(normalize_database_url(database_url))
        if kind is BackendKind.SQLITE and not _is_memory_sqlite(url):
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, **_engine_options(kind, url))
    except (ArgumentError, ImportError, OSError, ValueError) as e:
        raise ConnectionError(f"Invalid {kind.value} database descriptor") from e

    if kind is BackendKind.SQLITE:
        _enable_sqlite_foreign_keys(engine)
    return kind, engine


def connect_backend(
    database_url: str,
    logger: Optional[EntryBoxLogger] = None,
    migrate: bool = True,
) -> Backend:
    """
    Initialize the backend named by ``database_url``.

    Builds the engine with the pool policy of its kind, checks that the
    backend answers, and applies pending migrations for that kind.

    Args:
        database_url: Connection descriptor
        logger: Optional logger
        migrate: Apply pending migrations before returning

    Returns:
        Backend ready for sessions

    Raises:
        ConnectionError: Malformed descriptor or unreachable backend
        MigrationError: Schema application failed
    """
    log = safe_logger(logger)

    try:
        kind, engine = create_backend_engine(database_url)
    except ConnectionError as e:
        log.log_error(e, {"operation": "connect_backend"})
        raise

    masked_url = engine.url.render_as_string(hide_password=True)
    log.log_operation(
        "backend_init_start", {"backend": kind.value, "url": masked_url}
    )

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        log.log_error(e, {"operation": "connect_backend", "url": masked_url})
        raise ConnectionError(f"Could not connect to {kind.value} backend") from e

    if migrate:
        try:
            MigrationRunner(engine, kind, logger).upgrade()
        except Exception:
            engine.dispose()
            raise

    backend = Backend(
        kind=kind,
        engine=engine,
        dialect=dialect_for(kind.value),
        session_factory=sessionmaker(
            bind=engine, autoflush=True, expire_on_commit=False, future=True
        ),
        url=masked_url,
    )
    log.log_operation("backend_init_complete", {"backend": kind.value})
    return backend
