"""
Enumeration Types
------------------

Enums:
    - EntryStatus: Lifecycle state of an entry

Also holds the category names seeded by the initial migrations.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class EntryStatus(str, Enum):
    """
    Enumeration of entry statuses.
    - PLANNED: Captured, not started
    - IN_PROGRESS: Being read/watched/worked on
    - COMPLETED: Finished
    - DROPPED: Abandoned
    """

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DROPPED = "dropped"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available status values."""
        return [status.value for status in cls]

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


# Kinds that existed as a fixed list before categories became a table.
SEED_CATEGORIES = (
    "book",
    "manga",
    "article",
    "animation",
    "movie",
    "series",
    "note",
    "link",
)
