#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Centralized logging for entrybox.

Every component that touches the database writes through an EntryBoxLogger:
a rotating operations log, a dedicated errors log and a console handler
for warnings. Callers that run without a log directory get a NullLogger
through safe_logger(), so no call site needs an ``if logger`` guard.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class EntryBoxLogger:
    """
    Structured logger for entrybox operations.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Prefix for logger names and the main log file
        main_logger: Logger receiving every record (DEBUG and up)
        error_logger: Logger receiving errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "entrybox",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        """
        Args:
            log_dir: Directory for log files (created if missing)
            component_name: Component label, e.g. 'database' or 'cli'
            max_bytes: Size at which a log file is rotated
            backup_count: Rotated files to keep
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._setup_loggers()

    def _setup_loggers(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = logging.getLogger(f"entrybox.{self.component_name}")
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.handlers = []
        self.main_logger.propagate = False

        self.error_logger = logging.getLogger(f"entrybox.{self.component_name}.errors")
        self.error_logger.setLevel(logging.ERROR)
        self.error_logger.handlers = []
        self.error_logger.propagate = False

        self._attach_file_handler(
            self.main_logger, self.log_dir / f"{self.component_name}.log", logging.DEBUG
        )
        self._attach_file_handler(
            self.error_logger, self.log_dir / "errors.log", logging.ERROR
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _attach_file_handler(
        self, logger: logging.Logger, file_path: Path, level: int
    ) -> None:
        handler = RotatingFileHandler(
            file_path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(handler)

    @staticmethod
    def _format(prefix: str, message: str, details: Optional[Dict[str, Any]]) -> str:
        if details:
            return f"{prefix} - {message}: {json.dumps(details, default=str)}"
        return f"{prefix} - {message}"

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a completed operation in the main log."""
        self.main_logger.info(self._format("OPERATION", operation, details or {}))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(self._format("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(self._format("INFO", message, details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(self._format("WARNING", message, details))

    def log_error(
        self, error: BaseException, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an error, its context and the active traceback to errors.log.

        Backend diagnostics (the chained ``__cause__``) are written here so
        the exception message itself can stay generic.
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        cause = error.__cause__
        if cause is not None:
            self.error_logger.error(f"Cause - {type(cause).__name__}: {cause}")
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {context_str}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log full error details and return a short message for the terminal.

        Examples:
            >>> logger.log_cli_error(NotFoundError("entry", "abc"))
            '❌ NotFoundError: entry not found: abc'
        """
        self.log_error(error, context or {"source": "cli"})
        message = f"❌ {type(error).__name__}: {error}"
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


class NullLogger:
    """No-op stand-in implementing the EntryBoxLogger interface."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return f"❌ {type(error).__name__}: {error}"


_null_logger = NullLogger()


def safe_logger(logger: Optional[EntryBoxLogger]) -> EntryBoxLogger:
    """
    Return the provided logger, or the shared NullLogger when it is None.

    Use:
        safe_logger(self.logger).log_info("message")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: "click.Context",
    error: BaseException,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Standard error exit for CLI commands.

    Logs the error with the logger stored on the click context, prints a
    one-line message on stderr (with traceback under --verbose) and exits.
    Never returns.
    """
    obj = ctx.obj or {}
    logger: Optional[EntryBoxLogger] = obj.get("logger")
    verbose: bool = obj.get("verbose", False)

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    message = safe_logger(logger).log_cli_error(error, context, show_traceback=verbose)
    click.echo(message, err=True)
    sys.exit(exit_code)
