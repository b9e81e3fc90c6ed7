#!/usr/bin/env python3
"""
validators.py
--------------------
Normalization helpers shared by the database managers and capture flows.

Names of categories and tags are stored trimmed and lowercased; tag sets are
deduplicated and ordered; pagination arguments are clamped to the ranges the
listing queries accept.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .exceptions import ValidationError

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


class DataValidator:
    """Centralized normalization for database inputs."""

    @staticmethod
    def normalize_name(value: Any) -> Optional[str]:
        """
        Normalize a category or tag name (trimmed, lowercased).

        Returns:
            Normalized name, or None when nothing is left
        """
        if value is None:
            return None
        normalized = str(value).strip().lower()
        return normalized or None

    @staticmethod
    def require_name(value: Any, entity: str) -> str:
        """
        Normalize a name that must not be empty.

        Raises:
            ValidationError: If the name is empty after normalization
        """
        normalized = DataValidator.normalize_name(value)
        if not normalized:
            raise ValidationError(f"{entity} name cannot be empty")
        return normalized

    @staticmethod
    def normalize_tags(tags: Optional[Iterable[Any]]) -> List[str]:
        """
        Normalize a tag sequence into the canonical tag set.

        Each value is trimmed and lowercased, empty values are dropped,
        duplicates collapse, and the result is sorted lexicographically.

        Examples:
            >>> DataValidator.normalize_tags([" Reread", "manga", "MANGA", ""])
            ['manga', 'reread']
        """
        if not tags:
            return []
        normalized = {DataValidator.normalize_name(t) for t in tags}
        normalized.discard(None)
        return sorted(normalized)  # type: ignore[arg-type]

    @staticmethod
    def clamp_limit(limit: Optional[int]) -> int:
        """Clamp a page size to [1, MAX_LIMIT], defaulting to DEFAULT_LIMIT."""
        if limit is None:
            return DEFAULT_LIMIT
        return max(1, min(int(limit), MAX_LIMIT))

    @staticmethod
    def clamp_offset(offset: Optional[int]) -> int:
        """Clamp an offset to >= 0, defaulting to 0."""
        if offset is None:
            return 0
        return max(0, int(offset))
