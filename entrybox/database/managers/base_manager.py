#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager shared by the entry, tag and category managers.

Managers are bound to one session for the lifetime of a session_scope and
build their statements with SQLAlchemy Core against the mapped tables.
Anything that differs between SQLite and PostgreSQL is asked of the
QueryDialect the backend was initialized with.

Usage:
    class TagManager(BaseManager):
        @handle_db_errors
        @log_database_operation("create_tag")
        def create(self, name: str) -> TagRecord:
            ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import uuid
from abc import ABC
from typing import Any, Optional

# --- Third party imports ---
from sqlalchemy import exists, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import ColumnElement

# --- Local imports ---
from entrybox.core.logging_manager import EntryBoxLogger
from entrybox.database.dialects import QueryDialect
from entrybox.database.models import Category, Entry, Tag, entry_tags

entries_table = Entry.__table__
categories_table = Category.__table__
tags_table = Tag.__table__
entry_tags_table = entry_tags


class BaseManager(ABC):
    """
    Common plumbing for the table managers.

    Attributes:
        session: SQLAlchemy session for database operations
        dialect: Backend query strategy
        logger: Optional logger for operation tracking
    """

    def __init__(
        self,
        session: Session,
        dialect: QueryDialect,
        logger: Optional[EntryBoxLogger] = None,
    ) -> None:
        self.session = session
        self.dialect = dialect
        self.logger = logger

    @staticmethod
    def _new_id() -> str:
        """Opaque row identifier."""
        return str(uuid.uuid4())

    def _exists(self, *criteria: ColumnElement[Any]) -> bool:
        return bool(self.session.execute(select(exists().where(*criteria))).scalar())

    def _ts(self, column: ColumnElement[Any], label: str) -> ColumnElement[str]:
        """Timestamp column rendered as text under ``label``."""
        return self.dialect.timestamp_text(column).label(label)
