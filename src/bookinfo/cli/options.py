# ABOUTME: Shared Click options for bookinfo CLI commands.
# ABOUTME: Provides reusable decorators for --db, --header, --timeout, and --json.

from pathlib import Path

import click

from bookinfo.db.connection import DEFAULT_DB_PATH


def _parse_headers(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated ``Name: value`` options into a header dict."""
    headers: dict[str, str] = {}
    for value in values:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {value!r}")
        headers[name.strip()] = header_value.strip()
    return headers


db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="BOOKINFO_DB",
    help=f"Path to the bookinfo database (default: {DEFAULT_DB_PATH})",
)

header_option = click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    callback=_parse_headers,
    help="Extra request header as 'Name: value'. Overrides the defaults. Repeatable.",
)

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=30.0,
    show_default=True,
    help="HTTP timeout in seconds for catalog requests.",
)

json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the record as JSON instead of a table.",
)
