"""
Category Commands
-----------------

Commands:
    - categories add: Create a category
    - categories list: List categories by name
    - categories update: Rename or describe a category
    - categories delete: Delete an unused category
"""
import click

from entrybox.core.exceptions import EntryBoxError
from entrybox.core.logging_manager import handle_cli_error
from entrybox.dataclasses import CategoryUpdate, NewCategory
from . import get_db
from .output import echo_records, format_option


@click.group()
@click.pass_context
def categories(ctx: click.Context) -> None:
    """Manage categories (the allowed entry kinds)."""
    pass


@categories.command("add")
@click.argument("name")
@click.option("--description", default="")
@click.pass_context
def add(ctx, name, description):
    """Create a category."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            category = db.categories.create(NewCategory(name=name, description=description))
        click.echo(f"✅ Created category {category.name} ({category.id})")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "categories_add", {"name": name})


@categories.command("list")
@format_option
@click.pass_context
def list_categories(ctx, output_format):
    """List categories."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            records = db.categories.get_all()

        if output_format != "text":
            echo_records(records, output_format)
            return
        for category in records:
            description = f"  {category.description}" if category.description else ""
            click.echo(f"{category.id}  {category.name}{description}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "categories_list")


@categories.command("update")
@click.argument("category_id")
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.pass_context
def update(ctx, category_id, name, description):
    """Update a category's name and/or description."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            category = db.categories.update(
                category_id, CategoryUpdate(name=name, description=description)
            )
        click.echo(f"✅ Updated category {category.name}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "categories_update", {"category_id": category_id})


@categories.command("delete")
@click.argument("category_id")
@click.pass_context
def delete(ctx, category_id):
    """Delete a category no entry uses."""
    try:
        db = get_db(ctx)
        with db.session_scope():
            db.categories.delete(category_id)
        click.echo(f"🗑️  Deleted category {category_id}")
    except EntryBoxError as e:
        handle_cli_error(ctx, e, "categories_delete", {"category_id": category_id})
