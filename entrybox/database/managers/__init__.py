"""
Database Managers
-----------------
Table managers bound to a session for the duration of a session_scope.

- BaseManager: session, dialect and logger plumbing
- EntryManager: entries
- TagManager: tags, entry_tags and tag sync
- CategoryManager: categories
"""
from .base_manager import BaseManager
from .category_manager import CategoryManager
from .entry_manager import EntryManager
from .tag_manager import TagManager

__all__ = ["BaseManager", "CategoryManager", "EntryManager", "TagManager"]
