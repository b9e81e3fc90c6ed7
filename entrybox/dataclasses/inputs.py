#!/usr/bin/env python3
"""
inputs.py
-----------------
Value bundles accepted by the managers and capture flows.

Update bundles follow one rule: a field left as None is not touched.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class NewEntry:
    """Fields for inserting an entry. ``tags`` may be empty."""

    title: str
    kind: str
    status: str = "planned"
    notes: str = ""
    url: Optional[str] = None
    source: str = "manual"
    tags: List[str] = field(default_factory=list)


@dataclass
class EntryUpdate:
    """
    Partial entry update.

    ``tags`` set to a list (even an empty one) replaces the entry's tag set;
    None leaves tags alone.
    """

    title: Optional[str] = None
    kind: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None
    tags: Optional[List[str]] = None

    def column_values(self) -> Dict[str, Any]:
        """Set row fields, excluding tags."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "tags" and getattr(self, f.name) is not None
        }


@dataclass
class EntryFilters:
    """Optional listing filters; None means no constraint."""

    kind: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None
    tag: Optional[str] = None


@dataclass
class NewCategory:
    name: str
    description: str = ""


@dataclass
class CategoryUpdate:
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class QuickCapture:
    """
    Free-text capture with every entry field optional.

    Title and url are derived from ``text`` when not given.
    """

    text: str
    title: Optional[str] = None
    kind: Optional[str] = None
    status: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None
    tags: Optional[List[str]] = None
