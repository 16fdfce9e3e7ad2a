# ABOUTME: CLI package for bookinfo, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from bookinfo.cli.commands import crawl_cmd, get_cmd, put_cmd, tags_cmd


@click.group()
@click.version_option(package_name="bookinfo")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Bookinfo - ISBN metadata lookup backed by a local store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


cli.add_command(get_cmd.get)
cli.add_command(crawl_cmd.crawl)
cli.add_command(put_cmd.put)
cli.add_command(tags_cmd.tags)
