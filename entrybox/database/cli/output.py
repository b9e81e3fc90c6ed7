"""
Output helpers shared by the CLI commands.

Records are printed as a short human summary by default, or dumped as
JSON or YAML for scripting.
"""
import json
from typing import Any, Dict, List

import click
import yaml

from entrybox.dataclasses import EntryRecord

FORMATS = ("text", "json", "yaml")

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMATS),
    default="text",
    show_default=True,
    help="Output format",
)


def dump(data: Any, output_format: str) -> str:
    """Serialize plain data (dicts/lists) as JSON or YAML."""
    if output_format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip()
    return json.dumps(data, indent=2, ensure_ascii=False)


def echo_records(records: List[Any], output_format: str) -> None:
    data: List[Dict[str, Any]] = [r.to_dict() for r in records]
    click.echo(dump(data, output_format))


def format_entry_line(entry: EntryRecord) -> str:
    tags = f" [{', '.join(entry.tags)}]" if entry.tags else ""
    return f"{entry.id}  {entry.kind:<10} {entry.status:<12} {entry.title}{tags}"


def echo_entry(entry: EntryRecord, output_format: str = "text") -> None:
    if output_format != "text":
        click.echo(dump(entry.to_dict(), output_format))
        return

    click.echo(f"\n📌 {entry.title}")
    click.echo(f"  id:      {entry.id}")
    click.echo(f"  kind:    {entry.kind}")
    click.echo(f"  status:  {entry.status}")
    click.echo(f"  source:  {entry.source}")
    if entry.url:
        click.echo(f"  url:     {entry.url}")
    if entry.tags:
        click.echo(f"  tags:    {', '.join(entry.tags)}")
    click.echo(f"  created: {entry.created_at}")
    click.echo(f"  updated: {entry.updated_at}")
    if entry.notes:
        click.echo(f"\n{entry.notes}")
