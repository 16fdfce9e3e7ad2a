# ABOUTME: Rich rendering helpers for BookInfo records.
# ABOUTME: Shared by the get and crawl commands.

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookinfo.metadata.types import BookInfo

# Long-form sections are cut to this many characters in the table view.
_SECTION_PREVIEW = 200


def _preview(text: str) -> str:
    if len(text) <= _SECTION_PREVIEW:
        return text
    return text[:_SECTION_PREVIEW].rstrip() + "…"


def print_book_info(
    console: Console, info: BookInfo, *, as_json: bool = False, copies: int | None = None
) -> None:
    """Print a record as a two-column table, or as JSON."""
    if as_json:
        click.echo(json.dumps(info.to_dict(), ensure_ascii=False, indent=2))
        return

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", escape(info.title) or "[dim]unknown[/dim]")
    table.add_row("ISBN", escape(info.isbn) or "?")
    table.add_row("Author", escape(info.author) or "unknown")
    if info.publisher:
        table.add_row("Publisher", escape(info.publisher))
    if info.series:
        table.add_row("Series", escape(info.series))
    table.add_row("Price", info.price_display)
    if info.publish_date:
        table.add_row("Published", escape(info.publish_date))
    if info.binding:
        table.add_row("Binding", escape(info.binding))
    if info.format:
        table.add_row("Format", escape(info.format))
    if info.pages:
        table.add_row("Pages", str(info.pages))
    if info.word_count:
        table.add_row("Words", str(info.word_count))
    if info.tags:
        table.add_row("Tags", escape(", ".join(info.tags)))
    if info.content_intro:
        table.add_row("Summary", escape(_preview(info.content_intro)))
    if info.author_intro:
        table.add_row("About Author", escape(_preview(info.author_intro)))
    if info.menu:
        table.add_row("Contents", escape(_preview(info.menu)))
    if copies is not None:
        table.add_row("Copies", str(copies))

    console.print(table)
