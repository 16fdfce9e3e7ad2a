# ABOUTME: The `bookinfo crawl` command for live catalog lookups.
# ABOUTME: Always fetches from dushu.com and never touches the local store.

import click
from rich.console import Console
from rich.markup import escape

from bookinfo.cli.display import print_book_info
from bookinfo.cli.options import header_option, json_option, timeout_option
from bookinfo.cli.session import open_provider
from bookinfo.errors import BookInfoError

console = Console()


@click.command("crawl")
@click.argument("isbn")
@header_option
@timeout_option
@json_option
def crawl(isbn: str, headers: dict[str, str], timeout: float, as_json: bool) -> None:
    """Fetch a book's metadata from the online catalog."""
    try:
        with open_provider(headers, timeout) as provider:
            info = provider.crawl(isbn)
    except BookInfoError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    print_book_info(console, info, as_json=as_json)
