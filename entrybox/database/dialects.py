#!/usr/bin/env python3
"""
dialects.py
--------------------
Per-backend query-building strategies.

The managers build every statement once with SQLAlchemy Core and ask a
QueryDialect for the handful of fragments that differ between SQLite and
PostgreSQL:

    - JSON array aggregation (json_group_array vs json_agg)
    - the backend clock used for updated_at
    - timestamp columns rendered as text for the read models
    - INSERT ... ON CONFLICT DO NOTHING

Placeholder style (qmark for sqlite3, pyformat for psycopg) is applied by
SQLAlchemy when the statement is compiled for the bound engine; the
strategy records it so it can be reported and tested.

Usage:
    dialect = dialect_for("sqlite")
    stmt = dialect.insert_ignore(tags_table, ["name"]).values(id=..., name=...)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC, abstractmethod
from typing import Any, Sequence

# --- Third party imports ---
from sqlalchemy import Table, Text, cast, func, type_coerce
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import ColumnElement
from sqlalchemy.sql.dml import Insert

SQLITE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%fZ"


class QueryDialect(ABC):
    """
    Backend-specific SQL fragments behind one interface.

    Attributes:
        name: Backend name ("sqlite" or "postgres")
        paramstyle: DB-API placeholder style of the backend driver
    """

    name: str = ""
    paramstyle: str = ""

    @abstractmethod
    def json_array_agg(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        """Aggregate a column into a JSON array, returned as text."""

    @abstractmethod
    def now(self) -> ColumnElement[Any]:
        """Current timestamp as generated by the backend."""

    @abstractmethod
    def timestamp_text(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        """Render a timestamp column as text for read models."""

    @abstractmethod
    def insert_ignore(self, table: Table, index_elements: Sequence[str]) -> Insert:
        """INSERT that silently skips rows violating the given unique key."""

    @abstractmethod
    def sqlalchemy_dialect(self) -> Dialect:
        """SQLAlchemy dialect used to compile statements for inspection."""

    def compile(self, statement: Any) -> str:
        """Compile a statement to this backend's SQL text (for logs and tests)."""
        return str(statement.compile(dialect=self.sqlalchemy_dialect()))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class SqliteDialect(QueryDialect):
    """Embedded engine: JSON1 functions, ISO-8601 text timestamps."""

    name = "sqlite"
    paramstyle = "qmark"

    def json_array_agg(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        return func.json_group_array(column, type_=Text)

    def now(self) -> ColumnElement[Any]:
        return func.strftime(SQLITE_TIMESTAMP_FORMAT, "now", type_=Text)

    def timestamp_text(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        # Stored as TEXT already; skip DateTime result processing.
        return type_coerce(column, Text)

    def insert_ignore(self, table: Table, index_elements: Sequence[str]) -> Insert:
        return sqlite.insert(table).on_conflict_do_nothing(
            index_elements=list(index_elements)
        )

    def sqlalchemy_dialect(self) -> Dialect:
        return sqlite.dialect(paramstyle=self.paramstyle)


class PostgresDialect(QueryDialect):
    """Client/server engine: json_agg, TIMESTAMPTZ columns."""

    name = "postgres"
    paramstyle = "pyformat"

    def json_array_agg(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        return cast(func.json_agg(column), Text)

    def now(self) -> ColumnElement[Any]:
        return func.now()

    def timestamp_text(self, column: ColumnElement[Any]) -> ColumnElement[str]:
        return cast(column, Text)

    def insert_ignore(self, table: Table, index_elements: Sequence[str]) -> Insert:
        return postgresql.insert(table).on_conflict_do_nothing(
            index_elements=list(index_elements)
        )

    def sqlalchemy_dialect(self) -> Dialect:
        return postgresql.dialect(paramstyle=self.paramstyle)


_DIALECTS = {
    SqliteDialect.name: SqliteDialect,
    PostgresDialect.name: PostgresDialect,
}


def dialect_for(name: str) -> QueryDialect:
    """
    Return the strategy for a backend name.

    Raises:
        ValueError: If the name is not a supported backend
    """
    try:
        return _DIALECTS[name]()
    except KeyError:
        raise ValueError(
            f"Unsupported backend '{name}'. Supported: {', '.join(sorted(_DIALECTS))}"
        ) from None
