"""
Back-fill of the relational tag tables from legacy ``tags_json`` values.

Shared by the SQLite and PostgreSQL ``0002`` revisions: before categories and
tags became tables, an entry's tags only lived in its JSON column.
"""
import json
import uuid
from typing import Dict, List, Set, Tuple

import sqlalchemy as sa
from sqlalchemy.engine import Connection

_entries = sa.table(
    "entries", sa.column("id", sa.String), sa.column("tags_json", sa.Text)
)
_tags = sa.table("tags", sa.column("id", sa.String), sa.column("name", sa.Text))
_entry_tags = sa.table(
    "entry_tags", sa.column("entry_id", sa.String), sa.column("tag_id", sa.String)
)


def _normalize(raw: str) -> List[str]:
    try:
        values = json.loads(raw or "[]")
    except ValueError:
        return []
    if not isinstance(values, list):
        return []
    names = {str(v).strip().lower() for v in values if v is not None}
    names.discard("")
    return sorted(names)


def backfill_entry_tags(bind: Connection) -> int:
    """
    Create tags and associations for every entry with a non-empty cache.

    The cache is rewritten in normalized form so it matches the new rows.

    Returns:
        Number of association rows created
    """
    rows = bind.execute(
        sa.select(_entries.c.id, _entries.c.tags_json).where(
            _entries.c.tags_json != "[]"
        )
    ).fetchall()

    per_entry: Dict[str, List[str]] = {row.id: _normalize(row.tags_json) for row in rows}
    names: Set[str] = {name for tags in per_entry.values() for name in tags}
    if not names:
        return 0

    existing = {
        row.name: row.id
        for row in bind.execute(
            sa.select(_tags.c.id, _tags.c.name).where(_tags.c.name.in_(sorted(names)))
        )
    }
    new_tags = [{"id": str(uuid.uuid4()), "name": n} for n in sorted(names - set(existing))]
    if new_tags:
        bind.execute(_tags.insert(), new_tags)
        existing.update({t["name"]: t["id"] for t in new_tags})

    links: Set[Tuple[str, str]] = set()
    for entry_id, tags in per_entry.items():
        for name in tags:
            links.add((entry_id, existing[name]))
        bind.execute(
            _entries.update()
            .where(_entries.c.id == entry_id)
            .values(tags_json=json.dumps(tags))
        )

    if links:
        bind.execute(
            _entry_tags.insert(),
            [{"entry_id": e, "tag_id": t} for e, t in sorted(links)],
        )
    return len(links)
