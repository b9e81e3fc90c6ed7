#!/usr/bin/env python3
"""
migration_runner.py
--------------------
Alembic runner constructed by the backend selector at startup.

Each backend keeps its own revision chain under
``migrations/versions/<sqlite|postgres>``; the runner points Alembic at the
right one and runs it over the engine the backend already opened.

Usage:
    runner = MigrationRunner(engine, BackendKind.SQLITE, logger)
    runner.upgrade()
    runner.current_revision()  # '0002'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

# --- Third party imports ---
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

# --- Local imports ---
from entrybox.core.exceptions import MigrationError
from entrybox.core.logging_manager import EntryBoxLogger, safe_logger
from entrybox.core.paths import MIGRATIONS_DIR

if TYPE_CHECKING:
    from .backend import BackendKind


class MigrationRunner:
    """
    Applies the backend-specific Alembic revision chain to one engine.

    Attributes:
        engine: Engine whose connection the migrations run on
        kind: Backend tag selecting the version location
        config: Alembic configuration built for this engine
    """

    def __init__(
        self,
        engine: Engine,
        kind: "BackendKind",
        logger: Optional[EntryBoxLogger] = None,
        migrations_dir: Path = MIGRATIONS_DIR,
    ) -> None:
        self.engine = engine
        self.kind = kind
        self.logger = logger
        self.migrations_dir = Path(migrations_dir)
        self.config = self._build_config()

    @property
    def version_location(self) -> Path:
        return self.migrations_dir / "versions" / self.kind.value

    def _build_config(self) -> Config:
        config = Config()
        config.set_main_option("script_location", str(self.migrations_dir))
        config.set_main_option("version_locations", str(self.version_location))
        # ConfigParser interpolation: literal '%' must be doubled.
        url = self.engine.url.render_as_string(hide_password=False)
        config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
        return config

    def upgrade(self, revision: str = "head") -> None:
        """
        Upgrade the schema to ``revision`` inside one engine transaction.

        Raises:
            MigrationError: If any revision fails to apply
        """
        log = safe_logger(self.logger)
        log.log_info(
            "Applying migrations",
            {"backend": self.kind.value, "target": revision},
        )
        try:
            with self.engine.begin() as connection:
                self.config.attributes["connection"] = connection
                command.upgrade(self.config, revision)
        except Exception as e:
            log.log_error(e, {"operation": "upgrade", "target": revision})
            raise MigrationError(f"Schema upgrade to {revision} failed") from e
        finally:
            self.config.attributes.pop("connection", None)

        log.log_operation(
            "migrations_applied",
            {"backend": self.kind.value, "revision": self.current_revision()},
        )

    def current_revision(self) -> Optional[str]:
        """Revision stamped in the database, or None before the first upgrade."""
        with self.engine.connect() as connection:
            return MigrationContext.configure(connection).get_current_revision()

    def head_revision(self) -> Optional[str]:
        return ScriptDirectory.from_config(self.config).get_current_head()

    def history(self) -> List[Dict[str, Any]]:
        """
        Available revisions for this backend, oldest first.

        Returns:
            List of dicts with 'revision', 'down_revision' and 'message'
        """
        script = ScriptDirectory.from_config(self.config)
        revisions = [
            {
                "revision": rev.revision,
                "down_revision": rev.down_revision,
                "message": (rev.doc or "").strip(),
            }
            for rev in script.walk_revisions()
        ]
        revisions.reverse()
        return revisions
