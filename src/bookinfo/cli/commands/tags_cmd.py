# ABOUTME: The `bookinfo tags` command for listing tag labels.
# ABOUTME: Shows every attached tag with the number of books carrying it.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookinfo.cli.options import db_option
from bookinfo.db.connection import DEFAULT_DB_PATH, open_store
from bookinfo.db.store import BookStore
from bookinfo.errors import BookInfoError

console = Console()


@click.command("tags")
@db_option
def tags(db_path: Path | None) -> None:
    """List all tags with book counts."""
    try:
        conn = open_store(db_path or DEFAULT_DB_PATH)
        try:
            tag_counts = BookStore(conn).list_tags()
        finally:
            conn.close()
    except BookInfoError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    if not tag_counts:
        console.print("[yellow]No tags in the store.[/yellow]")
        return

    table = Table()
    table.add_column("Tag", style="cyan")
    table.add_column("Books", style="dim", justify="right")

    for name, count in tag_counts:
        table.add_row(escape(name), str(count))

    console.print(table)
