#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the entrybox project.

Exception Hierarchy:
    Exception (built-in)
    └── EntryBoxError - Base for everything raised by entrybox
        ├── DatabaseError - Opaque backend failure
        │   ├── ConnectionError - Backend unreachable or descriptor malformed
        │   └── MigrationError - Schema migration could not be applied
        ├── ValidationError - Input data failed validation
        │   ├── InvalidKindError - Entry kind has no matching category
        │   └── InvalidStatusError - Entry status outside the allowed set
        ├── NotFoundError - No row matched an id-keyed operation
        ├── DuplicateNameError - Category/tag name already taken
        └── ConflictError - Operation blocked by referencing rows

Usage:
    from entrybox.core.exceptions import NotFoundError, ValidationError

    try:
        db.entries.get(entry_id)
    except NotFoundError:
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional, Sequence


class EntryBoxError(Exception):
    """Base class for all entrybox errors."""

    pass


class DatabaseError(EntryBoxError):
    """
    Base exception for database-related errors.

    Raised when a backend operation fails for reasons the caller cannot
    act on: lost connections, constraint violations that are not name
    collisions, malformed stored data. The message never carries backend
    diagnostics; those are logged where the failure happens and stay
    reachable through ``__cause__``.

    Examples:
        >>> raise DatabaseError("Database operation failed")
    """

    pass


class ConnectionError(DatabaseError):  # noqa: A001
    """
    Exception for backend connection failures at startup.

    Raised when the connection descriptor cannot be parsed or the file or
    network resource it names cannot be reached.

    Examples:
        >>> raise ConnectionError("Could not connect to postgres backend")
    """

    pass


class MigrationError(DatabaseError):
    """
    Exception for schema migration failures at startup.

    Examples:
        >>> raise MigrationError("Schema upgrade to head failed")
    """

    pass


class ValidationError(EntryBoxError):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Empty names after normalization
    - Missing required fields
    - Malformed capture payloads

    Examples:
        >>> raise ValidationError("category name cannot be empty")
    """

    pass


class InvalidKindError(ValidationError):
    """
    Exception for an entry kind that does not match any category.

    Attributes:
        value: The rejected kind
        allowed: Known category names at validation time, when looked up
    """

    def __init__(self, value: str, allowed: Optional[Sequence[str]] = None) -> None:
        self.value = value
        self.allowed = list(allowed) if allowed is not None else None
        super().__init__(f"invalid kind `{value}`, not found in categories")


class InvalidStatusError(ValidationError):
    """
    Exception for an entry status outside the fixed enumeration.

    Attributes:
        value: The rejected status
        allowed: The allowed statuses
    """

    def __init__(self, value: str, allowed: Sequence[str]) -> None:
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"invalid status `{value}`, allowed: {', '.join(self.allowed)}"
        )


class NotFoundError(EntryBoxError):
    """
    Exception raised when no row matches an id-keyed operation.

    Attributes:
        entity: Entity type name ("entry", "category", "tag")
        identifier: The id that was looked up
    """

    def __init__(self, entity: str, identifier: str) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class DuplicateNameError(EntryBoxError):
    """
    Exception raised when a category or tag name is already taken.

    Attributes:
        entity: Entity type name ("category" or "tag")
        name: The normalized name that collided
    """

    def __init__(self, entity: str, name: str) -> None:
        self.entity = entity
        self.name = name
        super().__init__(f"{entity} `{name}` already exists")


class ConflictError(EntryBoxError):
    """
    Exception raised when an operation is blocked by other rows.

    Attributes:
        reason: Human-readable reason for the conflict

    Examples:
        >>> raise ConflictError("cannot delete category that is in use by entries")
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
