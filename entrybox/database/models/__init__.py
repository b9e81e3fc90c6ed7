"""
Database Models Package
------------------------

SQLAlchemy ORM models for the entrybox database.

- base: Declarative base
- associations: entry_tags many-to-many table
- enums: EntryStatus and the seeded category names
- core: Entry
- entities: Category, Tag

Usage:
    from entrybox.database.models import Entry, Tag, Category
"""
from .base import Base
from .enums import SEED_CATEGORIES, EntryStatus
from .associations import entry_tags
from .core import Entry
from .entities import Category, Tag

__all__ = [
    "Base",
    "EntryStatus",
    "SEED_CATEGORIES",
    "entry_tags",
    "Entry",
    "Category",
    "Tag",
]
