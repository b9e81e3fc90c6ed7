#!/usr/bin/env python3
"""
records.py
-----------------
Read models returned by the managers.

Managers never hand out ORM instances or raw rows: every read ends in one
of these frozen records. Timestamps are the backend's text rendering
(ISO-8601 on SQLite, ``timestamptz::text`` on PostgreSQL).
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from entrybox.core.exceptions import DatabaseError


def decode_tags(raw: Optional[str]) -> List[str]:
    """
    Decode a JSON tag array as stored in ``tags_json`` or aggregated at read time.

    Raises:
        DatabaseError: If the stored value is not a JSON array
    """
    if raw is None or raw == "":
        return []
    try:
        values = json.loads(raw)
    except ValueError as e:
        raise DatabaseError("Stored tag list is not valid JSON") from e
    if not isinstance(values, list):
        raise DatabaseError("Stored tag list is not a JSON array")
    return [str(v) for v in values if v is not None]


@dataclass(frozen=True)
class EntryRecord:
    """
    A captured item as seen by callers.

    Attributes:
        id: Entry identifier
        title: Display title
        kind: Category name
        status: Lifecycle status
        notes: Free text
        url: Optional link
        source: Provenance tag
        tags: Tag names, sorted
        created_at: Creation time (text)
        updated_at: Last update time (text)
    """

    id: str
    title: str
    kind: str
    status: str
    notes: str
    url: Optional[str]
    source: str
    tags: List[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "EntryRecord":
        return cls(
            id=row["id"],
            title=row["title"],
            kind=row["kind"],
            status=row["status"],
            notes=row["notes"] or "",
            url=row["url"],
            source=row["source"],
            tags=decode_tags(row["tags_json"]),
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CategoryRecord:
    id: str
    name: str
    description: str
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CategoryRecord":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            created_at=str(row["created_at"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TagRecord:
    id: str
    name: str
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TagRecord":
        return cls(id=row["id"], name=row["name"], created_at=str(row["created_at"]))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
