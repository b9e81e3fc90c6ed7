#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag rows and their association with entries.

The synchronizer replaces an entry's whole tag set in four steps:

    1. insert missing tag names (ignore on conflict)
    2. delete every entry_tags row of the entry
    3. insert one entry_tags row per name, resolved by name
    4. rewrite the entry's tags_json cache from those rows

All four run on the manager's session, so they commit or roll back with
the surrounding session_scope. Repeating a sync with the same input leaves
the same state behind.

Usage:
    with db.session_scope():
        db.tags.sync_entry_tags(entry_id, ["Manga", "reread", "manga"])
        db.tags.get_all()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from typing import Any, Iterable, List, Optional

# --- Third party imports ---
from sqlalchemy import String, delete, insert, literal, select
from sqlalchemy.exc import IntegrityError

# --- Local imports ---
from entrybox.core.exceptions import NotFoundError
from entrybox.core.validators import DataValidator
from entrybox.dataclasses import TagRecord
from entrybox.database.decorators import (
    handle_db_errors,
    log_database_operation,
    map_unique_error,
)

from .base_manager import BaseManager, entries_table, entry_tags_table, tags_table


class TagManager(BaseManager):
    """
    Manages the tags table and entry_tags associations.

    Tag names are trimmed, lowercased and unique.
    """

    @staticmethod
    def normalize_tags(tags: Optional[Iterable[Any]]) -> List[str]:
        """Trim, lowercase, drop empties, dedupe and sort."""
        return DataValidator.normalize_tags(tags)

    # -------------------------------------------------------------------------
    # Synchronization
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("sync_entry_tags")
    def sync_entry_tags(self, entry_id: str, tags: Optional[Iterable[Any]]) -> List[str]:
        """
        Replace the tag set of an entry.

        Args:
            entry_id: Entry whose tags are replaced
            tags: New tag names, any case, duplicates allowed

        Returns:
            The entry's tag names after the sync, sorted

        Raises:
            NotFoundError: If the entry does not exist
        """
        if not self._exists(entries_table.c.id == entry_id):
            raise NotFoundError("entry", entry_id)

        names = self.normalize_tags(tags)

        for name in names:
            self.session.execute(
                self.dialect.insert_ignore(tags_table, ["name"]).values(
                    id=self._new_id(), name=name, created_at=self.dialect.now()
                )
            )

        self.session.execute(
            delete(entry_tags_table).where(entry_tags_table.c.entry_id == entry_id)
        )

        if names:
            self.session.execute(
                insert(entry_tags_table).from_select(
                    ["entry_id", "tag_id"],
                    select(literal(entry_id, String(36)), tags_table.c.id).where(
                        tags_table.c.name.in_(names)
                    ),
                )
            )

        current = self.tag_names_for_entry(entry_id)
        self.session.execute(
            entries_table.update()
            .where(entries_table.c.id == entry_id)
            .values(tags_json=json.dumps(current))
        )

        if self.logger:
            self.logger.log_debug(
                "Synced entry tags", {"entry_id": entry_id, "tags": current}
            )
        return current

    def tag_names_for_entry(self, entry_id: str) -> List[str]:
        """Tag names currently associated with an entry, sorted."""
        stmt = (
            select(tags_table.c.name)
            .join(entry_tags_table, entry_tags_table.c.tag_id == tags_table.c.id)
            .where(entry_tags_table.c.entry_id == entry_id)
            .order_by(tags_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    def _select(self):
        return select(
            tags_table.c.id,
            tags_table.c.name,
            self._ts(tags_table.c.created_at, "created_at"),
        )

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self) -> List[TagRecord]:
        """All tags ordered by name."""
        rows = self.session.execute(self._select().order_by(tags_table.c.name))
        return [TagRecord.from_row(row) for row in rows.mappings()]

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, tag_id: str) -> TagRecord:
        """
        Raises:
            NotFoundError: If no tag has that id
        """
        row = (
            self.session.execute(self._select().where(tags_table.c.id == tag_id))
            .mappings()
            .first()
        )
        if row is None:
            raise NotFoundError("tag", tag_id)
        return TagRecord.from_row(row)

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, name: str) -> TagRecord:
        """
        Create a tag explicitly.

        Raises:
            ValidationError: If the name is empty after normalization
            DuplicateNameError: If the name is taken
        """
        normalized = DataValidator.require_name(name, "tag")
        tag_id = self._new_id()
        try:
            self.session.execute(
                insert(tags_table).values(
                    id=tag_id, name=normalized, created_at=self.dialect.now()
                )
            )
        except IntegrityError as e:
            raise map_unique_error(e, "tag", normalized) from e
        return self.get(tag_id)

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag_id: str) -> None:
        """
        Delete a tag and its associations.

        The tags_json cache of affected entries is left as is until their
        next sync.

        Raises:
            NotFoundError: If no tag has that id
        """
        self.session.execute(
            delete(entry_tags_table).where(entry_tags_table.c.tag_id == tag_id)
        )
        result = self.session.execute(delete(tags_table).where(tags_table.c.id == tag_id))
        if result.rowcount == 0:
            raise NotFoundError("tag", tag_id)
