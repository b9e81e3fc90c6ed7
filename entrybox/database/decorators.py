#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators for database operations.

Managers stack them as:

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, name): ...

so the raw backend error is logged with its diagnostics before being
turned into an opaque DatabaseError.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from functools import wraps
from typing import Callable

# --- Third party imports ---
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# --- Local imports ---
from entrybox.core.exceptions import (
    DatabaseError,
    DuplicateNameError,
    EntryBoxError,
)
from entrybox.core.logging_manager import safe_logger

UNIQUE_MARKERS = ("unique", "duplicate")


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                duration = (datetime.now() - start_time).total_seconds()
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": duration,
                    },
                )
                raise

            duration = (datetime.now() - start_time).total_seconds()
            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": duration,
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to turn backend errors into opaque DatabaseErrors.

    entrybox errors pass through untouched. The backend error stays
    reachable as ``__cause__`` but is not part of the message.
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except EntryBoxError:
            raise
        except IntegrityError as e:
            raise DatabaseError("Data integrity violation") from e
        except SQLAlchemyError as e:
            raise DatabaseError("Database operation failed") from e

    return wrapper


def is_unique_violation(error: BaseException) -> bool:
    """True if a backend error reports a uniqueness violation."""
    detail = str(getattr(error, "orig", None) or error).lower()
    return any(marker in detail for marker in UNIQUE_MARKERS)


def map_unique_error(error: BaseException, entity: str, name: str) -> EntryBoxError:
    """
    Classify a write error on a unique name column.

    Returns:
        DuplicateNameError for uniqueness violations, DatabaseError otherwise
    """
    if is_unique_violation(error):
        return DuplicateNameError(entity, name)
    return DatabaseError("Database operation failed")
