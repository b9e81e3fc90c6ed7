#!/usr/bin/env python3
"""
entrybox CLI
------------

Command-line interface over the entrybox data layer.

Command Structure:
    - Setup & Status (init, status, health)
    - Entries (entries add|list|show|update|delete, capture, capture-telegram)
    - Categories (categories add|list|update|delete)
    - Tags (tags add|list|delete)

Usage:
    entrybox --database-url sqlite:///data/entrybox.db init
    entrybox entries add "Read Pluto vol.1" --kind manga --tag reread
    entrybox entries list --tag reread --format yaml
"""
import logging

import click

from entrybox.core.paths import DATABASE_URL_ENV, DEFAULT_DATABASE_URL, LOG_DIR_ENV
from entrybox.database.manager import EntryBoxDB


@click.group()
@click.option(
    "--database-url",
    envvar=DATABASE_URL_ENV,
    default=DEFAULT_DATABASE_URL,
    show_default=True,
    help=f"Connection descriptor ('sqlite:...' or a PostgreSQL URL). Env: {DATABASE_URL_ENV}",
)
@click.option(
    "--log-dir",
    envvar=LOG_DIR_ENV,
    type=click.Path(file_okay=False),
    default=None,
    help=f"Directory for log files. Env: {LOG_DIR_ENV}",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, database_url, log_dir, verbose):
    """entrybox: capture and organize entries, categories and tags."""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url
    ctx.obj["log_dir"] = log_dir
    ctx.obj["verbose"] = verbose


def get_db(ctx: click.Context) -> EntryBoxDB:
    """Get or create the database instance for this invocation."""
    if "db" not in ctx.obj:
        db = EntryBoxDB(ctx.obj["database_url"], log_dir=ctx.obj["log_dir"])
        ctx.obj["db"] = db
        ctx.obj["logger"] = db.logger
        ctx.call_on_close(db.dispose)
    return ctx.obj["db"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init, status, health  # noqa: E402
from .entries import entries, capture, capture_telegram  # noqa: E402
from .categories import categories  # noqa: E402
from .tags import tags  # noqa: E402

cli.add_command(init)
cli.add_command(status)
cli.add_command(health)
cli.add_command(capture)
cli.add_command(capture_telegram)

cli.add_command(entries)
cli.add_command(categories)
cli.add_command(tags)


if __name__ == "__main__":
    cli(obj={})
