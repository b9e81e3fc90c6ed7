"""
Tests for logging_manager module.

Tests EntryBoxLogger file output, the NullLogger/safe_logger null object,
and the CLI error helper.
"""
import logging

import click
import pytest
from unittest.mock import MagicMock

from entrybox.core.exceptions import DatabaseError, NotFoundError
from entrybox.core.logging_manager import (
    EntryBoxLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """NullLogger should accept every logging call silently."""
        logger = NullLogger()
        logger.log_operation("op", {"key": "value"})
        logger.log_debug("debug")
        logger.log_info("info")
        logger.log_warning("warning")
        logger.log_error(ValueError("boom"), {"context": "test"})

    def test_null_logger_cli_error_message(self):
        """NullLogger.log_cli_error still formats a message for the terminal."""
        message = NullLogger().log_cli_error(NotFoundError("entry", "abc"))
        assert message == "❌ NotFoundError: entry not found: abc"


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_returns_null_logger_for_none(self):
        assert isinstance(safe_logger(None), NullLogger)

    def test_returns_given_logger(self):
        logger = MagicMock(spec=EntryBoxLogger)
        assert safe_logger(logger) is logger


class TestEntryBoxLogger:
    """Tests for EntryBoxLogger output files."""

    def _flush(self, logger):
        for handler in logger.main_logger.handlers + logger.error_logger.handlers:
            handler.flush()

    def test_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "logs" / "nested"
        EntryBoxLogger(log_dir, component_name="database")
        assert log_dir.is_dir()

    def test_operation_written_to_component_log(self, tmp_path):
        logger = EntryBoxLogger(tmp_path, component_name="database")
        logger.log_operation("create_entry_completed", {"duration_seconds": 0.1})
        self._flush(logger)

        content = (tmp_path / "database.log").read_text(encoding="utf-8")
        assert "OPERATION - create_entry_completed" in content
        assert '"duration_seconds": 0.1' in content

    def test_error_written_with_cause(self, tmp_path):
        logger = EntryBoxLogger(tmp_path, component_name="database")
        try:
            try:
                raise RuntimeError("UNIQUE constraint failed: tags.name")
            except RuntimeError as e:
                raise DatabaseError("Database operation failed") from e
        except DatabaseError as error:
            logger.log_error(error, {"operation": "create_tag"})
        self._flush(logger)

        content = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "DatabaseError: Database operation failed" in content
        assert "RuntimeError: UNIQUE constraint failed" in content
        assert "operation=create_tag" in content

    def test_loggers_do_not_propagate(self, tmp_path):
        logger = EntryBoxLogger(tmp_path, component_name="cli")
        assert logger.main_logger.propagate is False
        assert logger.main_logger.name == "entrybox.cli"
        assert logger.error_logger.level == logging.ERROR

    def test_cli_error_message_with_traceback(self, tmp_path):
        logger = EntryBoxLogger(tmp_path)
        message = logger.log_cli_error(ValueError("bad"), show_traceback=True)
        assert message.startswith("❌ ValueError: bad")
        assert "\n\n" in message


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_echoes_message_and_exits(self, capsys):
        ctx = click.Context(click.Command("test"), obj={"verbose": False})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, NotFoundError("tag", "t1"), "tags_delete")

        assert exc_info.value.code == 1
        assert "tag not found: t1" in capsys.readouterr().err

    def test_uses_logger_from_context(self):
        logger = MagicMock(spec=EntryBoxLogger)
        logger.log_cli_error.return_value = "❌ boom"
        ctx = click.Context(click.Command("test"), obj={"logger": logger})

        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("boom"), "op", {"entry_id": "e1"}, exit_code=2)

        args, kwargs = logger.log_cli_error.call_args
        assert args[1] == {"operation": "op", "entry_id": "e1"}
        assert kwargs["show_traceback"] is False
