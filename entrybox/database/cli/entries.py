"""
Entry Commands
--------------

Commands:
    - entries add: Create an entry
    - entries list: List entries with filters
    - entries show: Display one entry
    - entries update: Partially update an entry
    - entries delete: Delete an entry
    - capture: Quick capture from free text
    - capture-telegram: Capture a chat-bot update from a JSON file
"""
import json

import click

from entrybox.capture import quick_capture, telegram_capture
from entrybox.core.exceptions import EntryBoxError, ValidationError
from entrybox.core.logging_manager import handle_cli_error
from entrybox.core.validators import DEFAULT_LIMIT
from entrybox.dataclasses import EntryFilters, EntryUpdate, NewEntry, QuickCapture
from . import get_db
from .output import echo_entry, echo_records, format_entry_line, format_option

tag_option = click.option(
    "--tag", "tags", multiple=True, help="Tag name (repeatable)"
)


@click.group()
@click.pass_context
def entries(ctx: click.Context) -> None:
    """Create, browse and edit entries."""
    pass


@entries.command("add")
@click.argument("title")
@click.option("--kind", required=True, help="Category name")
@click.option("--status", default="planned", show_default=True)
@click.option("--notes", default="", help="Free text")
@click.option("--url", default=None)
@click.option("--source", default="manual", show_default=True)
@tag_option
@format_option
@click.pass_context
def add(ctx, title, kind, status, notes, url, source, tags, output_format):
    """Create an entry."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            entry = db.entries.create(
                NewEntry(
                    title=title,
                    kind=kind,
                    status=status,
                    notes=notes,
                    url=url,
                    source=source,
                    tags=list(tags),
                )
            )
        if output_format == "text":
            click.echo(f"✅ Created entry {entry.id}")
        else:
            echo_entry(entry, output_format)
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "entries_add", {"title": title})


@entries.command("list")
@click.option("--kind", default=None)
@click.option("--status", default=None)
@click.option("--search", default=None, help="Substring of title or notes")
@click.option("--tag", default=None)
@click.option("--limit", type=int, default=DEFAULT_LIMIT, show_default=True)
@click.option("--offset", type=int, default=0, show_default=True)
@format_option
@click.pass_context
def list_entries(ctx, kind, status, search, tag, limit, offset, output_format):
    """List entries, most recent first."""
    try:
        db = get_db(ctx)
        filters = EntryFilters(kind=kind, status=status, search=search, tag=tag)
        with db.session_scope():
            records = db.entries.list(filters, limit=limit, offset=offset)

        if output_format != "text":
            echo_records(records, output_format)
            return

        if not records:
            click.echo("No entries found")
            return
        for entry in records:
            click.echo(format_entry_line(entry))
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "entries_list")


@entries.command("show")
@click.argument("entry_id")
@format_option
@click.pass_context
def show(ctx, entry_id, output_format):
    """Display one entry."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            entry = db.entries.get(entry_id)
        echo_entry(entry, output_format)
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "entries_show", {"entry_id": entry_id})


@entries.command("update")
@click.argument("entry_id")
@click.option("--title", default=None)
@click.option("--kind", default=None)
@click.option("--status", default=None)
@click.option("--notes", default=None)
@click.option("--url", default=None)
@click.option("--source", default=None)
@tag_option
@click.option("--clear-tags", is_flag=True, help="Remove every tag")
@format_option
@click.pass_context
def update(
    ctx, entry_id, title, kind, status, notes, url, source, tags, clear_tags, output_format
):
    """Partially update an entry; omitted options are left unchanged."""
    try:
        if tags and clear_tags:
            raise ValidationError("--tag and --clear-tags are mutually exclusive")

        new_tags = [] if clear_tags else (list(tags) if tags else None)
        changes = EntryUpdate(
            title=title,
            kind=kind,
            status=status,
            notes=notes,
            url=url,
            source=source,
            tags=new_tags,
        )
        db = get_db(ctx)
        with db.session_scope():
            entry = db.entries.update(entry_id, changes)
        if output_format == "text":
            click.echo(f"✅ Updated entry {entry.id}")
        else:
            echo_entry(entry, output_format)
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "entries_update", {"entry_id": entry_id})


@entries.command("delete")
@click.argument("entry_id")
@click.confirmation_option(prompt="Delete this entry?")
@click.pass_context
def delete(ctx, entry_id):
    """Delete an entry."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.entries.delete(entry_id)
        click.echo(f"🗑️  Deleted entry {entry_id}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "entries_delete", {"entry_id": entry_id})


@click.command()
@click.argument("text")
@click.option("--title", default=None, help="Defaults to the first line of TEXT")
@click.option("--kind", default=None, help="Defaults to 'note'")
@click.option("--status", default=None, help="Defaults to 'planned'")
@click.option("--url", default=None, help="Defaults to the first link in TEXT")
@click.option("--source", default=None, help="Defaults to 'quick-capture'")
@tag_option
@format_option
@click.pass_context
def capture(ctx, text, title, kind, status, url, source, tags, output_format):
    """Quick capture: store TEXT as an entry."""
    try:
        db = get_db(ctx)
        entry = quick_capture(
            db,
            QuickCapture(
                text=text,
                title=title,
                kind=kind,
                status=status,
                url=url,
                source=source,
                tags=list(tags) or None,
            ),
        )
        if output_format == "text":
            click.echo(f"✅ Captured {entry.id}: {entry.title}")
        else:
            echo_entry(entry, output_format)
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "capture")


@click.command("capture-telegram")
@click.argument("update_file", type=click.File("r"), default="-")
@click.pass_context
def capture_telegram(ctx, update_file):
    """Capture a chat-bot update (JSON, from a file or stdin)."""
    try:
        try:
            update = json.load(update_file)
        except ValueError as e:
            raise ValidationError("update is not valid JSON") from e
        if not isinstance(update, dict):
            raise ValidationError("update must be a JSON object")

        db = get_db(ctx)
        result = telegram_capture(db, update)
        click.echo(json.dumps(result))
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "capture_telegram")
