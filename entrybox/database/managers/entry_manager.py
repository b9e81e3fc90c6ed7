#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manages Entry rows: insert, point lookup, filtered listing, partial
update and delete.

Reads differ on purpose:
    - get() aggregates tag names from entry_tags at read time
    - list() decodes the tags_json cache kept by the tag synchronizer

Usage:
    with db.session_scope():
        entry = db.entries.create(NewEntry(title="Pluto", kind="manga"))
        db.entries.list(EntryFilters(tag="reread"), limit=20)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import List, Optional

# --- Third party imports ---
from sqlalchemy import Text, delete, exists, func, insert, or_, select, update

# --- Local imports ---
from entrybox.core.exceptions import NotFoundError
from entrybox.core.validators import DataValidator
from entrybox.dataclasses import EntryFilters, EntryRecord, EntryUpdate, NewEntry
from entrybox.database.decorators import handle_db_errors, log_database_operation
from entrybox.validators import validate_kind, validate_status

from .base_manager import BaseManager, entries_table, entry_tags_table, tags_table
from .tag_manager import TagManager


class EntryManager(BaseManager):
    """
    Manages the entries table.

    Kind and status are validated before every write; tag changes go
    through TagManager.sync_entry_tags on the same session.
    """

    @property
    def tag_sync(self) -> TagManager:
        return TagManager(self.session, self.dialect, self.logger)

    def _columns(self, tags_json):
        e = entries_table
        return (
            e.c.id,
            e.c.title,
            e.c.kind,
            e.c.status,
            e.c.notes,
            e.c.url,
            e.c.source,
            tags_json.label("tags_json"),
            self._ts(e.c.created_at, "created_at"),
            self._ts(e.c.updated_at, "updated_at"),
        )

    def _aggregated_tags(self, entry_id: str):
        """Scalar subquery: the entry's tag names as a sorted JSON array."""
        names = (
            select(tags_table.c.name)
            .join(entry_tags_table, entry_tags_table.c.tag_id == tags_table.c.id)
            .where(entry_tags_table.c.entry_id == entry_id)
            .order_by(tags_table.c.name)
            .subquery("sub")
        )
        return select(
            func.coalesce(self.dialect.json_array_agg(names.c.name), "[]", type_=Text)
        ).scalar_subquery()

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("create_entry")
    def create(self, entry: NewEntry) -> EntryRecord:
        """
        Insert an entry and sync its tags.

        Returns:
            The entry as read back after the tag sync

        Raises:
            InvalidKindError: If no category matches ``entry.kind``
            InvalidStatusError: If ``entry.status`` is not a known status
        """
        validate_status(entry.status)
        validate_kind(self.session, entry.kind)

        entry_id = self._new_id()
        tags = DataValidator.normalize_tags(entry.tags)
        now = self.dialect.now()

        self.session.execute(
            insert(entries_table).values(
                id=entry_id,
                title=entry.title,
                kind=entry.kind,
                status=entry.status,
                notes=entry.notes or "",
                url=entry.url,
                source=entry.source,
                tags_json=json.dumps(tags),
                created_at=now,
                updated_at=now,
            )
        )

        if tags:
            self.tag_sync.sync_entry_tags(entry_id, tags)

        if self.logger:
            self.logger.log_debug(
                f"Created entry: {entry.title}", {"entry_id": entry_id}
            )
        return self.get(entry_id)

    @handle_db_errors
    @log_database_operation("get_entry")
    def get(self, entry_id: str) -> EntryRecord:
        """
        Fetch one entry with tags aggregated from entry_tags.

        Raises:
            NotFoundError: If no entry has that id
        """
        stmt = select(*self._columns(self._aggregated_tags(entry_id))).where(
            entries_table.c.id == entry_id
        )
        row = self.session.execute(stmt).mappings().first()
        if row is None:
            raise NotFoundError("entry", entry_id)
        return EntryRecord.from_row(row)

    @handle_db_errors
    @log_database_operation("list_entries")
    def list(
        self,
        filters: Optional[EntryFilters] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[EntryRecord]:
        """
        List entries, most recent first.

        Args:
            filters: kind/status exact match, search on title or notes
                (case-insensitive substring), tag by name. The tag filter
                is trimmed and lowercased before matching, the same
                normalization stored tag names get, so " ReRead " finds
                entries tagged "reread".
            limit: Page size, clamped to [1, 200], default 50
            offset: Rows to skip, clamped to >= 0

        Raises:
            InvalidKindError: If a kind filter names no category
            InvalidStatusError: If a status filter is not a known status
        """
        filters = filters or EntryFilters()
        e = entries_table
        conditions = []

        if filters.kind is not None:
            validate_kind(self.session, filters.kind)
            conditions.append(e.c.kind == filters.kind)

        if filters.status is not None:
            validate_status(filters.status)
            conditions.append(e.c.status == filters.status)

        if filters.search:
            needle = filters.search.lower()
            conditions.append(
                or_(
                    func.lower(e.c.title, type_=Text).contains(needle, autoescape=True),
                    func.lower(e.c.notes, type_=Text).contains(needle, autoescape=True),
                )
            )

        tag = DataValidator.normalize_name(filters.tag)
        if tag:
            conditions.append(
                exists().where(
                    entry_tags_table.c.entry_id == e.c.id,
                    entry_tags_table.c.tag_id == tags_table.c.id,
                    tags_table.c.name == tag,
                )
            )

        stmt = (
            select(*self._columns(e.c.tags_json))
            .where(*conditions)
            .order_by(e.c.created_at.desc())
            .limit(DataValidator.clamp_limit(limit))
            .offset(DataValidator.clamp_offset(offset))
        )
        return [EntryRecord.from_row(row) for row in self.session.execute(stmt).mappings()]

    @handle_db_errors
    @log_database_operation("update_entry")
    def update(self, entry_id: str, changes: EntryUpdate) -> EntryRecord:
        """
        Apply a partial update; unset fields keep their value.

        ``updated_at`` is refreshed on every call. When ``changes.tags`` is
        set, the tag set is replaced after the row update.

        Raises:
            NotFoundError: If no entry has that id
            InvalidKindError: If a new kind names no category
            InvalidStatusError: If a new status is not a known status
        """
        if changes.status is not None:
            validate_status(changes.status)
        if changes.kind is not None:
            validate_kind(self.session, changes.kind)

        values = changes.column_values()
        values["updated_at"] = self.dialect.now()

        result = self.session.execute(
            update(entries_table).where(entries_table.c.id == entry_id).values(**values)
        )
        if result.rowcount == 0:
            raise NotFoundError("entry", entry_id)

        if changes.tags is not None:
            self.tag_sync.sync_entry_tags(entry_id, changes.tags)

        return self.get(entry_id)

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete(self, entry_id: str) -> None:
        """
        Delete an entry and its tag associations.

        Raises:
            NotFoundError: If no entry has that id
        """
        self.session.execute(
            delete(entry_tags_table).where(entry_tags_table.c.entry_id == entry_id)
        )
        result = self.session.execute(
            delete(entries_table).where(entries_table.c.id == entry_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("entry", entry_id)
