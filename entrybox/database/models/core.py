"""
Core Models
------------

Models:
    - Entry: A captured item (book, article, note, link, ...)

An entry keeps its tags twice: relationally through ``entry_tags`` and as a
JSON-encoded cache in ``tags_json``. The tag synchronizer is the only writer
of both, and keeps the cache equal to the sorted association rows.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base

if TYPE_CHECKING:
    from .entities import Tag


class Entry(Base):
    """
    Central model representing a captured item.

    Attributes:
        id: UUID string generated by the entry store
        title: Display title
        kind: Name of the category this entry belongs to
        status: One of EntryStatus
        notes: Free text
        url: Optional link
        source: Provenance ('manual', 'quick-capture', 'telegram:<chat-id>')
        tags_json: JSON array cache of the entry's tag names
        created_at: Backend-generated creation time
        updated_at: Backend-generated time of the last row update

    Relationships:
        tags: Many-to-many with Tag (read-only view of entry_tags)
    """

    __tablename__ = "entries"
    __table_args__ = (
        Index("idx_entries_created_at", "created_at"),
        Index("idx_entries_kind_status", "kind", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    kind: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source: Mapped[str] = mapped_column(Text, nullable=False, default="manual")
    tags_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=entry_tags, back_populates="entries", viewonly=True
    )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id!r}, title={self.title!r}, kind={self.kind!r})>"
