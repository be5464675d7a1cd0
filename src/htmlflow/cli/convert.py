"""CLI command: htmlflow convert -- turn markup and CSS into a document."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from htmlflow.config import ConverterConfig
from htmlflow.engine.converter import Converter
from htmlflow.errors import ConversionError
from htmlflow.model.document import ClipboardDocument


def read_inputs(markup_file: str, css_files: tuple[str, ...]) -> tuple[str, str]:
    """Read the markup (``-`` for stdin) and concatenate the stylesheets."""
    if markup_file == "-":
        markup = click.get_text_stream("stdin").read()
    else:
        markup = Path(markup_file).read_text(encoding="utf-8")
    stylesheet = "\n".join(Path(f).read_text(encoding="utf-8") for f in css_files)
    return markup, stylesheet


def run_conversion(
    markup_file: str, css_files: tuple[str, ...], config: ConverterConfig
) -> ClipboardDocument:
    markup, stylesheet = read_inputs(markup_file, css_files)
    try:
        return Converter(config).convert(markup, stylesheet)
    except ConversionError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.command()
@click.argument("markup_file", type=click.Path(exists=True, allow_dash=True))
@click.option(
    "--css",
    "css_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Stylesheet to apply (repeatable)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the document here instead of stdout",
)
@click.option("--indent", type=int, default=None, help="Pretty-print with this indent")
@click.option(
    "--section-wrap/--no-section-wrap",
    default=True,
    help="Wrap section content in a container block",
)
def convert(
    markup_file: str,
    css_files: tuple[str, ...],
    output: str | None,
    indent: int | None,
    section_wrap: bool,
) -> None:
    """Convert an HTML file (and optional CSS) into a clipboard document.

    The document is written as JSON to OUTPUT, or to stdout.
    """
    config = ConverterConfig(wrap_sections=section_wrap)
    document = run_conversion(markup_file, css_files, config)
    text = document.to_json(indent=indent)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(
            f"Wrote {len(document.nodes)} nodes and {len(document.styles)} styles to {output}",
            err=True,
        )
    else:
        click.echo(text)
