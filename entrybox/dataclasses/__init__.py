"""
dataclasses package
-------------------
Read models and input bundles for the entrybox data layer.

- EntryRecord, CategoryRecord, TagRecord: what managers return
- NewEntry, EntryUpdate, EntryFilters: entry inputs
- NewCategory, CategoryUpdate: category inputs
- QuickCapture: free-text capture input
"""
from entrybox.dataclasses.inputs import (
    CategoryUpdate,
    EntryFilters,
    EntryUpdate,
    NewCategory,
    NewEntry,
    QuickCapture,
)
from entrybox.dataclasses.records import CategoryRecord, EntryRecord, TagRecord

__all__ = [
    "CategoryRecord",
    "CategoryUpdate",
    "EntryFilters",
    "EntryRecord",
    "EntryUpdate",
    "NewCategory",
    "NewEntry",
    "QuickCapture",
    "TagRecord",
]
