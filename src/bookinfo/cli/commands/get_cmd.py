# ABOUTME: The `bookinfo get` command for read-through ISBN lookups.
# ABOUTME: Shows the stored record, or a live crawl result when the store has none.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookinfo.cli.display import print_book_info
from bookinfo.cli.options import db_option, header_option, json_option, timeout_option
from bookinfo.cli.session import open_service
from bookinfo.errors import BookInfoError

console = Console()


@click.command("get")
@click.argument("isbn")
@db_option
@header_option
@timeout_option
@json_option
def get(
    isbn: str,
    db_path: Path | None,
    headers: dict[str, str],
    timeout: float,
    as_json: bool,
) -> None:
    """Look up a book by ISBN, checking the local store first."""
    try:
        with open_service(db_path, headers, timeout) as (service, store):
            info = service.get(isbn)
            copies = store.count_book_copies(isbn)
    except BookInfoError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    print_book_info(console, info, as_json=as_json, copies=None if as_json else copies)
