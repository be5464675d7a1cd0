"""Converter: orchestrates one markup + stylesheet conversion."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import Tag

from htmlflow.config import ConverterConfig
from htmlflow.css.extractor import extract_advanced_css
from htmlflow.css.normalizer import merge_rules, normalize_stylesheet, parse_custom_properties
from htmlflow.engine.finalizer import compose_relocated_css, finalize
from htmlflow.engine.session import ConversionSession
from htmlflow.engine.usage import collect_used_classes
from htmlflow.engine.walker import TreeWalker
from htmlflow.errors import EmptyInputError
from htmlflow.model.document import ClipboardDocument

logger = logging.getLogger(__name__)


def parse_markup(markup: str, parser: str) -> BeautifulSoup:
    """Parse *markup*, giving bare fragments an html/body shell.

    Structural selectors such as `:root` or `body > p` then see the same
    document shape a browser would build.
    """
    soup = BeautifulSoup(markup, parser)
    if soup.html is None and soup.body is None:
        soup = BeautifulSoup(f"<html><body>{markup}</body></html>", parser)
    return soup


def content_roots(soup: BeautifulSoup) -> list[Tag]:
    """Top-level elements to convert: ``<body>``'s children when present."""
    container: Tag = soup
    if soup.body is not None:
        container = soup.body
    elif soup.html is not None:
        container = soup.html
    return [c for c in container.children if isinstance(c, Tag) and c.name != "head"]


def extract_style_blocks(soup: BeautifulSoup) -> list[str]:
    """Remove every ``<style>`` element from *soup* and return their text."""
    blocks: list[str] = []
    for style in soup.find_all("style"):
        blocks.append(style.get_text())
        style.decompose()
    return blocks


class Converter:
    """Convert markup and CSS text into a clipboard document.

    A converter holds only configuration; every call builds its own
    :class:`ConversionSession`, so one instance can serve concurrent calls.
    """

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()

    def convert(self, markup: str, stylesheet: str = "") -> ClipboardDocument:
        if not markup or not markup.strip():
            raise EmptyInputError()

        session = ConversionSession(config=self.config)
        soup = parse_markup(markup, self.config.html_parser)

        inline_blocks = extract_style_blocks(soup)
        rules = normalize_stylesheet(stylesheet)
        session.custom_properties.update(parse_custom_properties(stylesheet))
        for block in inline_blocks:
            merge_rules(rules, normalize_stylesheet(block))
            session.custom_properties.update(parse_custom_properties(block))

        roots = content_roots(soup)
        collect_used_classes(roots, session.used_classes)
        session.materialize_styles(rules)
        for rule in session.unused_rules:
            logger.debug("Relocating unused class rule: %s", rule)

        advanced_css = extract_advanced_css("\n".join([stylesheet, *inline_blocks]))

        top_level = TreeWalker(session).walk(roots)
        relocated = compose_relocated_css(advanced_css, session.unused_rules)
        document = finalize(session, top_level, relocated)

        logger.info(
            "Converted markup into %d nodes and %d styles (%d unused class rules relocated)",
            len(document.nodes),
            len(document.styles),
            len(session.unused_rules),
        )
        return document


def convert(
    markup: str, stylesheet: str = "", config: ConverterConfig | None = None
) -> dict:
    """Convert *markup* and *stylesheet* into a JSON-serializable document."""
    return Converter(config).convert(markup, stylesheet).to_dict()
