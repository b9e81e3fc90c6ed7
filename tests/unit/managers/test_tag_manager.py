"""
test_tag_manager.py
-------------------
Unit tests for TagManager: tag sync and tag CRUD.
"""
import json

import pytest
from sqlalchemy import text

from entrybox.core.exceptions import (
    DuplicateNameError,
    NotFoundError,
    ValidationError,
)


def relational_state(session, entry_id):
    """Tag names linked to an entry plus its cached tag list."""
    names = session.execute(
        text(
            "SELECT t.name FROM tags t JOIN entry_tags et ON et.tag_id = t.id "
            "WHERE et.entry_id = :id ORDER BY t.name"
        ),
        {"id": entry_id},
    ).scalars().all()
    cache = session.execute(
        text("SELECT tags_json FROM entries WHERE id = :id"), {"id": entry_id}
    ).scalar()
    return names, cache


class TestSyncEntryTags:
    """Test TagManager.sync_entry_tags()."""

    @pytest.mark.parametrize(
        "tags, expected",
        [
            (["manga", "reread"], ["manga", "reread"]),
            (["Reread", "MANGA", "manga"], ["manga", "reread"]),
            (["  b ", "a", "", "   "], ["a", "b"]),
            ([], []),
        ],
    )
    def test_sync_then_fetch(self, make_entry, tag_manager, entry_manager, tags, expected):
        entry = make_entry()

        assert tag_manager.sync_entry_tags(entry.id, tags) == expected
        assert entry_manager.get(entry.id).tags == expected

    def test_sync_is_idempotent(self, make_entry, tag_manager, db_session):
        entry = make_entry()

        tag_manager.sync_entry_tags(entry.id, ["b", "a", "B"])
        first = relational_state(db_session, entry.id)
        tag_count = db_session.execute(text("SELECT COUNT(*) FROM tags")).scalar()

        tag_manager.sync_entry_tags(entry.id, ["b", "a", "B"])

        assert relational_state(db_session, entry.id) == first
        assert db_session.execute(text("SELECT COUNT(*) FROM tags")).scalar() == tag_count

    def test_cache_matches_associations(self, make_entry, tag_manager, db_session):
        entry = make_entry()
        tag_manager.sync_entry_tags(entry.id, ["z", "a"])

        names, cache = relational_state(db_session, entry.id)
        assert json.loads(cache) == names == ["a", "z"]

    def test_full_replace(self, make_entry, tag_manager, db_session):
        entry = make_entry(tags=["old", "keep"])

        tag_manager.sync_entry_tags(entry.id, ["keep", "new"])

        names, _ = relational_state(db_session, entry.id)
        assert names == ["keep", "new"]

    def test_existing_tag_is_reused(self, make_entry, tag_manager):
        first = make_entry(tags=["shared"])
        second = make_entry(tags=["shared"])

        tags = tag_manager.get_all()
        assert [t.name for t in tags] == ["shared"]
        assert first.tags == second.tags == ["shared"]

    def test_sync_other_entry_untouched(self, make_entry, tag_manager, entry_manager):
        a = make_entry(tags=["x"])
        b = make_entry(tags=["y"])

        tag_manager.sync_entry_tags(a.id, ["z"])

        assert entry_manager.get(b.id).tags == ["y"]

    def test_sync_missing_entry_raises(self, tag_manager):
        with pytest.raises(NotFoundError):
            tag_manager.sync_entry_tags("nope", ["a"])

    def test_normalize_tags(self, tag_manager):
        assert tag_manager.normalize_tags(["B", "a", "b"]) == ["a", "b"]


class TestTagCrud:
    """Test explicit tag operations."""

    def test_create_normalizes(self, tag_manager):
        tag = tag_manager.create("  Python ")
        assert tag.name == "python"
        assert tag.created_at

    def test_create_duplicate_raises(self, tag_manager):
        tag_manager.create("python")
        with pytest.raises(DuplicateNameError) as exc_info:
            tag_manager.create("PYTHON")
        assert exc_info.value.name == "python"

    def test_create_empty_raises(self, tag_manager):
        with pytest.raises(ValidationError):
            tag_manager.create("   ")

    def test_get_all_ordered(self, tag_manager):
        for name in ("c", "a", "b"):
            tag_manager.create(name)
        assert [t.name for t in tag_manager.get_all()] == ["a", "b", "c"]

    def test_get(self, tag_manager):
        tag = tag_manager.create("x")
        assert tag_manager.get(tag.id) == tag

    def test_get_missing_raises(self, tag_manager):
        with pytest.raises(NotFoundError, match="tag not found"):
            tag_manager.get("nope")

    def test_delete_removes_links_but_not_cache(self, make_entry, tag_manager, entry_manager):
        entry = make_entry(tags=["a", "b"])
        tag_a = next(t for t in tag_manager.get_all() if t.name == "a")

        tag_manager.delete(tag_a.id)

        assert entry_manager.get(entry.id).tags == ["b"]
        assert entry_manager.list()[0].tags == ["a", "b"]

    def test_delete_missing_raises(self, tag_manager):
        with pytest.raises(NotFoundError):
            tag_manager.delete("nope")
