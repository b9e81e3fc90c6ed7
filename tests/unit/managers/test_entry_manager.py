"""
test_entry_manager.py
---------------------
Unit tests for EntryManager: insert, fetch, list, update and delete.
"""
import json
import time

import pytest
from sqlalchemy import text

from entrybox.core.exceptions import (
    InvalidKindError,
    InvalidStatusError,
    NotFoundError,
)
from entrybox.dataclasses import EntryFilters, EntryUpdate, NewEntry


class TestEntryManagerCreate:
    """Test EntryManager.create()."""

    def test_create_scenario(self, entry_manager):
        """Insert with tags returns the read-back entry after tag sync."""
        entry = entry_manager.create(
            NewEntry(
                title="Read Pluto vol.1",
                kind="manga",
                status="planned",
                notes="",
                tags=["manga", "reread"],
            )
        )

        assert entry.id
        assert entry.tags == ["manga", "reread"]
        assert entry.created_at == entry.updated_at
        assert entry.source == "manual"

    def test_ids_are_unique(self, make_entry):
        assert make_entry().id != make_entry().id

    def test_create_without_tags(self, entry_manager, db_session):
        entry = entry_manager.create(NewEntry(title="Dune", kind="book"))

        assert entry.tags == []
        links = db_session.execute(text("SELECT COUNT(*) FROM entry_tags")).scalar()
        assert links == 0

    def test_create_normalizes_tags(self, entry_manager):
        entry = entry_manager.create(
            NewEntry(title="Dune", kind="book", tags=[" SciFi", "scifi", "Classic"])
        )
        assert entry.tags == ["classic", "scifi"]

    def test_create_rejects_unknown_kind(self, entry_manager):
        with pytest.raises(InvalidKindError) as exc_info:
            entry_manager.create(NewEntry(title="x", kind="podcast"))
        assert exc_info.value.value == "podcast"

    def test_kind_match_is_case_sensitive(self, entry_manager):
        with pytest.raises(InvalidKindError):
            entry_manager.create(NewEntry(title="x", kind="Manga"))

    def test_create_rejects_unknown_status(self, entry_manager):
        with pytest.raises(InvalidStatusError) as exc_info:
            entry_manager.create(NewEntry(title="x", kind="note", status="done"))
        assert "planned" in exc_info.value.allowed


class TestEntryManagerGet:
    """Test EntryManager.get()."""

    def test_get_missing_raises(self, entry_manager):
        with pytest.raises(NotFoundError, match="entry not found: nope"):
            entry_manager.get("nope")

    def test_get_recomputes_tags_from_associations(self, make_entry, entry_manager, db_session):
        """get() ignores a stale cache; list() reads it."""
        entry = make_entry(tags=["manga"])
        db_session.execute(
            text("UPDATE entries SET tags_json = :stale WHERE id = :id"),
            {"stale": json.dumps(["stale"]), "id": entry.id},
        )

        assert entry_manager.get(entry.id).tags == ["manga"]
        assert entry_manager.list()[0].tags == ["stale"]

    def test_get_tags_sorted(self, make_entry, entry_manager):
        entry = make_entry(tags=["zeta", "alpha", "mid"])
        assert entry_manager.get(entry.id).tags == ["alpha", "mid", "zeta"]


class TestEntryManagerList:
    """Test EntryManager.list()."""

    def test_empty_database(self, entry_manager):
        assert entry_manager.list() == []

    def test_most_recent_first(self, make_entry, entry_manager):
        for title in ("first", "second", "third"):
            make_entry(title=title)

        entries = entry_manager.list()
        created = [e.created_at for e in entries]

        assert created == sorted(created, reverse=True)
        assert [e.title for e in entries] == ["third", "second", "first"]

    def test_filter_by_kind(self, make_entry, entry_manager):
        make_entry(title="Dune", kind="book")
        make_entry(title="Pluto", kind="manga")

        result = entry_manager.list(EntryFilters(kind="book"))
        assert [e.title for e in result] == ["Dune"]

    def test_filter_by_status(self, make_entry, entry_manager):
        make_entry(title="a", status="completed")
        make_entry(title="b")

        result = entry_manager.list(EntryFilters(status="completed"))
        assert [e.title for e in result] == ["a"]

    def test_search_title_or_notes_case_insensitive(self, make_entry, entry_manager):
        make_entry(title="Read PLUTO vol.1")
        make_entry(title="Monster", notes="same author as pluto")
        make_entry(title="Dune", kind="book")

        result = entry_manager.list(EntryFilters(search="Pluto"))
        assert sorted(e.title for e in result) == ["Monster", "Read PLUTO vol.1"]

    def test_search_treats_wildcards_literally(self, make_entry, entry_manager):
        make_entry(title="100% done")
        make_entry(title="1000 done")

        result = entry_manager.list(EntryFilters(search="0%"))
        assert [e.title for e in result] == ["100% done"]

    def test_filter_by_tag(self, make_entry, entry_manager):
        make_entry(title="a", tags=["reread"])
        make_entry(title="b", tags=["other"])

        result = entry_manager.list(EntryFilters(tag="reread"))
        assert [e.title for e in result] == ["a"]

    def test_tag_filter_is_normalized_like_stored_tags(self, make_entry, entry_manager):
        make_entry(title="a", tags=["ReRead"])

        assert [e.title for e in entry_manager.list(EntryFilters(tag=" REREAD "))] == ["a"]
        assert entry_manager.list(EntryFilters(tag="   ")) != []

    def test_filters_combine(self, make_entry, entry_manager):
        make_entry(title="Pluto", tags=["reread"], status="completed")
        make_entry(title="Pluto 2", tags=["reread"])
        make_entry(title="Pluto 3", status="completed")

        result = entry_manager.list(
            EntryFilters(search="pluto", tag="reread", status="completed")
        )
        assert [e.title for e in result] == ["Pluto"]

    def test_unknown_kind_filter_raises(self, entry_manager):
        with pytest.raises(InvalidKindError):
            entry_manager.list(EntryFilters(kind="podcast"))

    def test_unknown_status_filter_raises(self, entry_manager):
        with pytest.raises(InvalidStatusError):
            entry_manager.list(EntryFilters(status="done"))

    def test_limit_and_offset(self, make_entry, entry_manager):
        for i in range(5):
            make_entry(title=f"e{i}")

        page = entry_manager.list(limit=2, offset=1)
        assert [e.title for e in page] == ["e3", "e2"]

    def test_limit_clamped_to_at_least_one(self, make_entry, entry_manager):
        make_entry(title="a")
        make_entry(title="b")

        assert len(entry_manager.list(limit=0)) == 1
        assert len(entry_manager.list(limit=-3, offset=-10)) == 1


class TestEntryManagerUpdate:
    """Test EntryManager.update()."""

    def test_update_status_only(self, make_entry, entry_manager):
        entry = make_entry(tags=["manga"], notes="volume one", url="https://example.com")
        time.sleep(0.02)

        updated = entry_manager.update(entry.id, EntryUpdate(status="completed"))

        assert updated.status == "completed"
        assert updated.title == entry.title
        assert updated.kind == entry.kind
        assert updated.notes == entry.notes
        assert updated.url == entry.url
        assert updated.source == entry.source
        assert updated.tags == entry.tags
        assert updated.created_at == entry.created_at
        assert updated.updated_at > entry.updated_at

    def test_update_replaces_tags(self, make_entry, entry_manager):
        entry = make_entry(tags=["a", "b"])

        updated = entry_manager.update(entry.id, EntryUpdate(tags=["C", "b"]))
        assert updated.tags == ["b", "c"]

    def test_update_with_empty_tags_clears(self, make_entry, entry_manager):
        entry = make_entry(tags=["a"])

        updated = entry_manager.update(entry.id, EntryUpdate(tags=[]))
        assert updated.tags == []
        assert entry_manager.list()[0].tags == []

    def test_update_missing_raises(self, entry_manager):
        with pytest.raises(NotFoundError):
            entry_manager.update("nope", EntryUpdate(title="x"))

    def test_update_validates_kind(self, make_entry, entry_manager):
        entry = make_entry()
        with pytest.raises(InvalidKindError):
            entry_manager.update(entry.id, EntryUpdate(kind="podcast"))

    def test_update_validates_status(self, make_entry, entry_manager):
        entry = make_entry()
        with pytest.raises(InvalidStatusError):
            entry_manager.update(entry.id, EntryUpdate(status="paused"))


class TestEntryManagerDelete:
    """Test EntryManager.delete()."""

    def test_delete_removes_entry_and_links(self, make_entry, entry_manager, db_session):
        entry = make_entry(tags=["a"])

        entry_manager.delete(entry.id)

        with pytest.raises(NotFoundError):
            entry_manager.get(entry.id)
        links = db_session.execute(text("SELECT COUNT(*) FROM entry_tags")).scalar()
        assert links == 0

    def test_delete_keeps_tags(self, make_entry, entry_manager, tag_manager):
        entry = make_entry(tags=["a"])
        entry_manager.delete(entry.id)
        assert [t.name for t in tag_manager.get_all()] == ["a"]

    def test_delete_missing_raises(self, entry_manager):
        with pytest.raises(NotFoundError):
            entry_manager.delete("nope")
