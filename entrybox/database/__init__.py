#!/usr/bin/env python3
"""
entrybox Database Package
-------------------------
Persistence layer for entries, categories and tags on SQLite or PostgreSQL.

- backend: engine selection, pooling and startup migrations
- dialects: per-backend SQL fragments
- models: ORM tables
- managers: entry, tag and category managers
- manager: EntryBoxDB facade

The facade lives in entrybox.database.manager and is not re-exported here,
since the managers import the validators, which import these models.
"""
from .backend import Backend, BackendKind, connect_backend, select_backend_kind
from .decorators import handle_db_errors, log_database_operation, map_unique_error
from .dialects import PostgresDialect, QueryDialect, SqliteDialect, dialect_for
from .migration_runner import MigrationRunner

__all__ = [
    "Backend",
    "BackendKind",
    "MigrationRunner",
    "PostgresDialect",
    "QueryDialect",
    "SqliteDialect",
    "connect_backend",
    "dialect_for",
    "handle_db_errors",
    "log_database_operation",
    "map_unique_error",
    "select_backend_kind",
]
