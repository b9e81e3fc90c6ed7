"""
Entity Models
--------------

Models:
    - Category: Named classification referenced by Entry.kind
    - Tag: Reusable label attached to entries

Both names are unique and stored lowercased.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .associations import entry_tags
from .base import Base

if TYPE_CHECKING:
    from .core import Entry


class Category(Base):
    """
    Classification that entry kinds must reference.

    There is no foreign key from entries.kind; the category store refuses
    to delete a category while an entry's kind equals its name.
    """

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("name", name="uq_categories_name"),
        Index("idx_categories_name", "name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"


class Tag(Base):
    """Keyword label, created lazily during tag sync or explicitly."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("name", name="uq_tags_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    entries: Mapped[List["Entry"]] = relationship(
        "Entry", secondary=entry_tags, back_populates="tags", viewonly=True
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id!r}, name={self.name!r})>"
