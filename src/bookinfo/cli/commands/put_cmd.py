# ABOUTME: The `bookinfo put` command for registering a book record and copy.
# ABOUTME: Loads a JSON record, stores its metadata and copy, and replaces its tags.

import json
from pathlib import Path
from typing import IO

import click
from rich.console import Console
from rich.markup import escape

from bookinfo.cli.options import db_option
from bookinfo.cli.session import open_service
from bookinfo.errors import BookInfoError
from bookinfo.metadata.types import BookInfo

console = Console()


@click.command("put")
@click.argument("record_file", type=click.File("r", encoding="utf-8"))
@db_option
@click.option(
    "-u",
    "--unique-code",
    default=None,
    help="Unique code of the physical copy (overrides the record's uniqueCode).",
)
@click.option(
    "--volume",
    type=int,
    default=None,
    help="Volume number of the copy (overrides the record's volume).",
)
def put(
    record_file: IO[str],
    db_path: Path | None,
    unique_code: str | None,
    volume: int | None,
) -> None:
    """Store a book record read from a JSON file ('-' for stdin)."""
    try:
        data = json.load(record_file)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error:[/red] invalid JSON: {escape(str(exc))}")
        raise SystemExit(1) from exc
    if not isinstance(data, dict):
        console.print("[red]Error:[/red] record must be a JSON object")
        raise SystemExit(1)

    try:
        record = BookInfo.from_dict(data)
        if unique_code is not None:
            record.unique_code = unique_code
        if volume is not None:
            record.volume = volume
        with open_service(db_path) as (service, _store):
            service.put(record)
    except BookInfoError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    console.print(
        f"Stored [bold]{escape(record.title or record.isbn)}[/bold] "
        f"as copy [cyan]{escape(record.unique_code)}[/cyan]."
    )
