#!/usr/bin/env python3
"""
capture.py
-------------------
Capture flows that create entries from free text.

- quick_capture: text plus optional overrides, defaults to a planned note
- telegram_capture: a chat-bot update mapping, one note per message

Both run inside their own session_scope on the given EntryBoxDB.

Usage:
    entry = quick_capture(db, QuickCapture(text="https://example.com nice read"))
    telegram_capture(db, update)  # {'status': 'accepted', 'entry_id': '...'}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, Any, Dict, Mapping

# --- Local imports ---
from entrybox.core.exceptions import ValidationError
from entrybox.dataclasses import EntryRecord, NewEntry, QuickCapture
from entrybox.database.models import EntryStatus
from entrybox.utils.text import extract_url_from_text, summarize_title

if TYPE_CHECKING:
    from entrybox.database.manager import EntryBoxDB

DEFAULT_KIND = "note"
DEFAULT_STATUS = EntryStatus.PLANNED.value
QUICK_CAPTURE_SOURCE = "quick-capture"
TELEGRAM_SOURCE_PREFIX = "telegram"


def build_quick_entry(capture: QuickCapture) -> NewEntry:
    """Fill the fields a quick capture left out."""
    return NewEntry(
        title=capture.title or summarize_title(capture.text),
        kind=capture.kind or DEFAULT_KIND,
        status=capture.status or DEFAULT_STATUS,
        notes=capture.text,
        url=capture.url or extract_url_from_text(capture.text),
        source=capture.source or QUICK_CAPTURE_SOURCE,
        tags=list(capture.tags or []),
    )


def quick_capture(db: "EntryBoxDB", capture: QuickCapture) -> EntryRecord:
    """
    Create an entry from free text.

    Raises:
        InvalidKindError: If the kind names no category
        InvalidStatusError: If the status is not a known status
    """
    entry = build_quick_entry(capture)
    with db.session_scope():
        return db.entries.create(entry)


def parse_telegram_update(update: Mapping[str, Any]) -> NewEntry:
    """
    Turn a chat-bot update into a planned note.

    The message is ``message`` or, failing that, ``edited_message``; its text
    is ``text`` or, failing that, ``caption``.

    Raises:
        ValidationError: If the update has no message or the message no text
    """
    message = update.get("message") or update.get("edited_message")
    if not message:
        raise ValidationError("telegram update does not contain a message payload")

    text = message.get("text") or message.get("caption")
    if text is None:
        raise ValidationError("telegram message does not contain text")

    chat = message.get("chat") or {}
    if chat.get("id") is None:
        raise ValidationError("telegram message does not contain a chat id")

    return NewEntry(
        title=summarize_title(text),
        kind=DEFAULT_KIND,
        status=DEFAULT_STATUS,
        notes=text,
        url=extract_url_from_text(text),
        source=f"{TELEGRAM_SOURCE_PREFIX}:{chat['id']}",
        tags=[],
    )


def telegram_capture(db: "EntryBoxDB", update: Mapping[str, Any]) -> Dict[str, str]:
    """
    Store a chat-bot message as a note.

    Returns:
        {"status": "accepted", "entry_id": <new entry id>}
    """
    entry = parse_telegram_update(update)
    with db.session_scope():
        record = db.entries.create(entry)
    return {"status": "accepted", "entry_id": record.id}
