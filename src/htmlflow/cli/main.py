"""Htmlflow CLI entry point: Click group with subcommands."""

import logging

import click

from htmlflow import __version__


@click.group()
@click.version_option(version=__version__, prog_name="htmlflow")
@click.option("-v", "--verbose", is_flag=True, help="Log conversion details to stderr")
def cli(verbose: bool) -> None:
    """Htmlflow - convert HTML and CSS into a pasteable design document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from htmlflow.cli.convert import convert  # noqa: E402
from htmlflow.cli.inspect import inspect  # noqa: E402
from htmlflow.cli.validate import validate  # noqa: E402

cli.add_command(convert)
cli.add_command(inspect)
cli.add_command(validate)
