"""
Association Tables
-------------------

Many-to-many table connecting entries with tags. Rows disappear with
either side (ON DELETE CASCADE).
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Index, String, Table

# --- Local imports ---
from .base import Base

entry_tags = Table(
    "entry_tags",
    Base.metadata,
    Column(
        "entry_id",
        String(36),
        ForeignKey("entries.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(36),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("idx_entry_tags_tag_id", "tag_id"),
)
