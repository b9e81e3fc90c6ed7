#!/usr/bin/env python3
"""
entry.py
--------------------
Validation rules for entry kind and status.

Kinds are open-ended: any category name is a valid kind. Statuses are the
fixed EntryStatus set. Only validate_kind touches the database, with a
single EXISTS read when the kind is known.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party imports ---
from sqlalchemy import exists, select
from sqlalchemy.orm import Session

# --- Local imports ---
from entrybox.core.exceptions import InvalidKindError, InvalidStatusError
from entrybox.database.models import Category, EntryStatus


def validate_kind(session: Session, kind: str) -> None:
    """
    Check that a category named exactly ``kind`` exists.

    The match is case-sensitive; category names are stored lowercased.

    Raises:
        InvalidKindError: Carrying the rejected value and the known
            category names, sorted
    """
    categories = Category.__table__
    found = session.execute(
        select(exists().where(categories.c.name == kind))
    ).scalar()
    if not found:
        allowed = session.execute(
            select(categories.c.name).order_by(categories.c.name)
        ).scalars().all()
        raise InvalidKindError(kind, allowed)


def validate_status(status: str) -> None:
    """
    Check that ``status`` is one of the EntryStatus values.

    Raises:
        InvalidStatusError: Carrying the rejected value and the allowed list
    """
    allowed = EntryStatus.choices()
    if status not in allowed:
        raise InvalidStatusError(status, allowed)
