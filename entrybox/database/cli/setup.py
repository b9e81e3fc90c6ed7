"""
Setup & Status Commands
-----------------------

Commands:
    - init: Create or upgrade the schema
    - status: Show migration status
    - health: Ping the backend
"""
import click

from entrybox.core.exceptions import EntryBoxError
from entrybox.core.logging_manager import handle_cli_error
from . import get_db


@click.command()
@click.option("--revision", default="head", show_default=True, help="Target revision")
@click.pass_context
def init(ctx, revision):
    """Initialize the database (apply migrations)."""
    try:
        click.echo("🚀 Initializing entrybox database...")
        db = get_db(ctx)
        if revision != "head":
            db.upgrade_database(revision)
        history = db.get_migration_history()
        click.echo(
            f"✅ {history['backend']} database at revision "
            f"{history['current_revision']}"
        )
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "init")


@click.command()
@click.pass_context
def status(ctx):
    """Show migration status."""
    try:
        db = get_db(ctx)
        history = db.get_migration_history()

        click.echo("\n📊 Migration Status")
        click.echo("=" * 50)
        click.echo(f"Backend:  {history['backend']}")
        click.echo(f"Database: {db.database_url}")
        click.echo(f"Current:  {history['current_revision'] or '(none)'}")
        click.echo(f"Head:     {history['head_revision']}")
        click.echo(f"Status:   {history['status']}")

        click.echo("\nRevisions:")
        for rev in history["revisions"]:
            marker = "→" if rev["revision"] == history["current_revision"] else " "
            message = rev["message"].splitlines()[0] if rev["message"] else ""
            click.echo(f"  {marker} {rev['revision']}  {message}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "status")


@click.command()
@click.pass_context
def health(ctx):
    """Check that the backend answers."""
    try:
        db = get_db(ctx)
        result = db.health_check()
        icon = "✅" if result["status"] == "ok" else "⚠️ "
        click.echo(f"{icon} status: {result['status']}  database: {result['database']}")
        if result["status"] != "ok":
            ctx.exit(1)
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "health")
