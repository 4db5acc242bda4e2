# ABOUTME: CLI package for tunetag, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click

from tunetag.cli.commands import config_cmd, cover_cmd, providers_cmd, search_cmd


@click.group()
@click.version_option(package_name="tunetag")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """tunetag - look up music metadata across online providers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(search_cmd.search)
cli.add_command(providers_cmd.providers)
cli.add_command(config_cmd.config)
cli.add_command(cover_cmd.cover)


def main() -> None:
    cli()
