"""CLI command: htmlflow inspect -- summarize a conversion."""

from __future__ import annotations

from collections import Counter

import click

from htmlflow.cli.convert import run_conversion
from htmlflow.config import ConverterConfig
from htmlflow.model.node import ElementNode, EmbedNode, TextNode


@click.command()
@click.argument("markup_file", type=click.Path(exists=True, allow_dash=True))
@click.option(
    "--css",
    "css_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Stylesheet to apply (repeatable)",
)
def inspect(markup_file: str, css_files: tuple[str, ...]) -> None:
    """Convert an HTML file and display the resulting structure.

    Shows node counts per type, styles with their declaration counts,
    custom properties, and the size of the relocated CSS.
    """
    document = run_conversion(markup_file, css_files, ConverterConfig())

    kinds: Counter[str] = Counter()
    relocated = 0
    for node in document.nodes:
        if isinstance(node, TextNode):
            kinds["Text"] += 1
        elif isinstance(node, EmbedNode):
            kinds["HtmlEmbed"] += 1
            if node.html.startswith("<style>"):
                relocated += len(node.html)
        elif isinstance(node, ElementNode):
            kinds[str(node.type)] += 1

    click.echo(f"Nodes: {len(document.nodes)}")
    for kind, count in sorted(kinds.items()):
        click.echo(f"  {kind}: {count}")
    click.echo()

    click.echo(f"Styles: {len(document.styles)}")
    for style in document.styles:
        declarations = style.style_less.count(";")
        click.echo(f"  {style.name}  ({declarations} declarations)")
    click.echo()

    if document.custom_properties:
        click.echo(f"Custom properties: {len(document.custom_properties)}")
        for name, value in document.custom_properties.items():
            click.echo(f"  {name}: {value}")
        click.echo()

    click.echo(f"Relocated CSS: {relocated} characters")
