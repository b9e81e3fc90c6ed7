"""
Tag Commands
------------

Commands:
    - tags add: Create a tag
    - tags list: List tags by name
    - tags delete: Delete a tag and its associations
"""
import click

from entrybox.core.exceptions import EntryBoxError
from entrybox.core.logging_manager import handle_cli_error
from . import get_db
from .output import echo_records, format_option


@click.group()
@click.pass_context
def tags(ctx: click.Context) -> None:
    """Manage tags."""
    pass


@tags.command("add")
@click.argument("name")
@click.pass_context
def add(ctx, name):
    """Create a tag."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            tag = db.tags.create(name)
        click.echo(f"✅ Created tag {tag.name} ({tag.id})")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "tags_add", {"name": name})


@tags.command("list")
@format_option
@click.pass_context
def list_tags(ctx, output_format):
    """List tags."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            records = db.tags.get_all()

        if output_format != "text":
            echo_records(records, output_format)
            return
        for tag in records:
            click.echo(f"{tag.id}  {tag.name}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "tags_list")


@tags.command("delete")
@click.argument("tag_id")
@click.pass_context
def delete(ctx, tag_id):
    """Delete a tag. Cached tag lists on entries refresh on their next sync."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.tags.delete(tag_id)
        click.echo(f"🗑️  Deleted tag {tag_id}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "tags_delete", {"tag_id": tag_id})
