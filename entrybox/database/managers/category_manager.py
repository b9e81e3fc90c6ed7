#!/usr/bin/env python3
"""
category_manager.py
--------------------
Manages Category rows.

Categories are the vocabulary of entry kinds. Names are trimmed,
lowercased and unique; a category stays undeletable while any entry's
kind equals its name.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List

# --- Third party imports ---
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

# --- Local imports ---
from entrybox.core.exceptions import ConflictError, NotFoundError
from entrybox.core.validators import DataValidator
from entrybox.dataclasses import CategoryRecord, CategoryUpdate, NewCategory
from entrybox.database.decorators import (
    handle_db_errors,
    log_database_operation,
    map_unique_error,
)

from .base_manager import BaseManager, categories_table, entries_table

IN_USE_REASON = "cannot delete category that is in use by entries"


class CategoryManager(BaseManager):
    """Manages the categories table."""

    def _select(self):
        c = categories_table
        return select(c.c.id, c.c.name, c.c.description, self._ts(c.c.created_at, "created_at"))

    @handle_db_errors
    @log_database_operation("create_category")
    def create(self, category: NewCategory) -> CategoryRecord:
        """
        Raises:
            ValidationError: If the name is empty after normalization
            DuplicateNameError: If the name is taken
        """
        name = DataValidator.require_name(category.name, "category")
        category_id = self._new_id()
        try:
            self.session.execute(
                insert(categories_table).values(
                    id=category_id,
                    name=name,
                    description=category.description or "",
                    created_at=self.dialect.now(),
                )
            )
        except IntegrityError as e:
            raise map_unique_error(e, "category", name) from e
        return self.get(category_id)

    @handle_db_errors
    @log_database_operation("get_category")
    def get(self, category_id: str) -> CategoryRecord:
        """
        Raises:
            NotFoundError: If no category has that id
        """
        row = (
            self.session.execute(
                self._select().where(categories_table.c.id == category_id)
            )
            .mappings()
            .first()
        )
        if row is None:
            raise NotFoundError("category", category_id)
        return CategoryRecord.from_row(row)

    @handle_db_errors
    @log_database_operation("get_all_categories")
    def get_all(self) -> List[CategoryRecord]:
        """All categories ordered by name."""
        rows = self.session.execute(self._select().order_by(categories_table.c.name))
        return [CategoryRecord.from_row(row) for row in rows.mappings()]

    @handle_db_errors
    @log_database_operation("update_category")
    def update(self, category_id: str, changes: CategoryUpdate) -> CategoryRecord:
        """
        Partial update of name and/or description.

        Entries whose kind used the old name are not rewritten.

        Raises:
            NotFoundError: If no category has that id
            ValidationError: If a new name is empty after normalization
            DuplicateNameError: If a new name is taken
        """
        values = {}
        if changes.name is not None:
            values["name"] = DataValidator.require_name(changes.name, "category")
        if changes.description is not None:
            values["description"] = changes.description

        if not values:
            return self.get(category_id)

        try:
            result = self.session.execute(
                update(categories_table)
                .where(categories_table.c.id == category_id)
                .values(**values)
            )
        except IntegrityError as e:
            raise map_unique_error(e, "category", values.get("name", "")) from e

        if result.rowcount == 0:
            raise NotFoundError("category", category_id)
        return self.get(category_id)

    @handle_db_errors
    @log_database_operation("delete_category")
    def delete(self, category_id: str) -> None:
        """
        Delete an unreferenced category.

        Raises:
            ConflictError: If an entry's kind equals the category name
            NotFoundError: If no category has that id
        """
        in_use = self._exists(
            entries_table.c.kind == categories_table.c.name,
            categories_table.c.id == category_id,
        )
        if in_use:
            raise ConflictError(IN_USE_REASON)

        result = self.session.execute(
            delete(categories_table).where(categories_table.c.id == category_id)
        )
        if result.rowcount == 0:
            raise NotFoundError("category", category_id)
