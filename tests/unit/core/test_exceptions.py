"""Tests for the entrybox exception hierarchy."""
import builtins

from entrybox.core.exceptions import (
    ConflictError,
    ConnectionError,
    DatabaseError,
    DuplicateNameError,
    EntryBoxError,
    InvalidKindError,
    InvalidStatusError,
    MigrationError,
    NotFoundError,
    ValidationError,
)


class TestHierarchy:
    """Every error is an EntryBoxError; startup errors are DatabaseErrors."""

    def test_startup_errors_are_database_errors(self):
        assert issubclass(ConnectionError, DatabaseError)
        assert issubclass(MigrationError, DatabaseError)

    def test_connection_error_is_not_builtin(self):
        assert ConnectionError is not builtins.ConnectionError

    def test_validation_subclasses(self):
        assert issubclass(InvalidKindError, ValidationError)
        assert issubclass(InvalidStatusError, ValidationError)

    def test_all_share_base(self):
        for cls in (NotFoundError, DuplicateNameError, ConflictError, DatabaseError):
            assert issubclass(cls, EntryBoxError)


class TestMessages:
    """Error payloads and messages."""

    def test_invalid_kind_carries_value(self):
        error = InvalidKindError("podcast")
        assert error.value == "podcast"
        assert error.allowed is None
        assert str(error) == "invalid kind `podcast`, not found in categories"

    def test_invalid_status_carries_allowed(self):
        error = InvalidStatusError("done", ["planned", "completed"])
        assert error.value == "done"
        assert error.allowed == ["planned", "completed"]
        assert "allowed: planned, completed" in str(error)

    def test_not_found(self):
        error = NotFoundError("entry", "abc")
        assert (error.entity, error.identifier) == ("entry", "abc")
        assert str(error) == "entry not found: abc"

    def test_duplicate_name(self):
        assert str(DuplicateNameError("category", "fiction")) == (
            "category `fiction` already exists"
        )

    def test_conflict_reason(self):
        error = ConflictError("cannot delete category that is in use by entries")
        assert error.reason in str(error)
