"""Conversion session: all mutable state owned by one conversion call."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from htmlflow.config import ConverterConfig
from htmlflow.css.selector import analyze_selector
from htmlflow.model.node import Node
from htmlflow.model.style import Style

# Bare tag selectors that get a fixed, readable synthetic class name.
FIXED_SLUG_TAGS = frozenset({
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "div", "span", "a", "button", "input",
    "section", "header", "footer", "main", "aside", "nav",
})

_NON_WORD_RE = re.compile(r"[^\w\s-]")
_SPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def synthesize_class_name(selector: str) -> str:
    """Derive a class name for a tag, combinator, or otherwise complex selector."""
    tag = analyze_selector(selector).bare_tag
    if tag in FIXED_SLUG_TAGS:
        return f"custom-styled-{tag}"
    slug = _NON_WORD_RE.sub("", selector.lower()).strip()
    slug = _HYPHENS_RE.sub("-", _SPACE_RE.sub("-", slug)).strip("-")
    return f"scoped-style-{slug or 'rule'}"


@dataclass
class ConversionSession:
    """Ephemeral state for a single ``convert`` call.

    Nothing here is shared between calls; nodes and styles only ever grow.
    """

    config: ConverterConfig = field(default_factory=ConverterConfig)
    nodes: list[Node] = field(default_factory=list)
    styles: list[Style] = field(default_factory=list)
    # literal class name -> style id
    class_styles: dict[str, str] = field(default_factory=dict)
    # selector -> synthesized class name
    selector_classes: dict[str, str] = field(default_factory=dict)
    # synthesized class name -> style id
    synthetic_styles: dict[str, str] = field(default_factory=dict)
    styles_by_id: dict[str, Style] = field(default_factory=dict)
    # selector -> declaration string for every non-simple-class rule
    complex_rules: dict[str, str] = field(default_factory=dict)
    used_classes: set[str] = field(default_factory=set)
    merged_pairs: set[tuple[str, str]] = field(default_factory=set)
    custom_properties: dict[str, str] = field(default_factory=dict)
    unused_rules: list[str] = field(default_factory=list)

    def new_id(self) -> str:
        return self.config.id_factory()

    def add_node(self, node: Node) -> Node:
        self.nodes.append(node)
        return node

    def add_style(self, name: str, style_less: str) -> Style:
        """Create a style with a fresh id and register it."""
        style = Style(
            id=self.new_id(),
            name=name,
            style_less=style_less,
            created_by=self.config.created_by,
        )
        self.styles.append(style)
        self.styles_by_id[style.id] = style
        return style

    def unique_style_name(self, name: str) -> str:
        """Return *name*, suffixed with a counter if a style already uses it."""
        taken = {s.name for s in self.styles}
        if name not in taken:
            return name
        n = 2
        while f"{name}-{n}" in taken:
            n += 1
        return f"{name}-{n}"

    def materialize_styles(self, rules: dict[str, str]) -> None:
        """Turn normalized rules into styles.

        Simple class selectors become literal styles when the class is used
        in the markup and are queued for relocation otherwise. Every other
        selector becomes a synthetic style and a complex rule to match.
        Literal styles are created first so synthesized names never shadow a
        real class name.
        """
        complex_rules: dict[str, str] = {}
        for selector, style_less in rules.items():
            class_name = analyze_selector(selector).simple_class
            if class_name is None:
                complex_rules[selector] = style_less
            elif class_name not in self.used_classes:
                self.unused_rules.append(f"{selector} {{ {style_less} }}")
            elif class_name in self.class_styles:
                self.styles_by_id[self.class_styles[class_name]].append(style_less)
            else:
                style = self.add_style(class_name, style_less)
                self.class_styles[class_name] = style.id

        for selector, style_less in complex_rules.items():
            self.complex_rules[selector] = style_less
            name = self.unique_style_name(synthesize_class_name(selector))
            self.selector_classes[selector] = name
            style = self.add_style(name, style_less)
            self.synthetic_styles[name] = style.id

    def synthetic_style_id(self, selector: str) -> str | None:
        name = self.selector_classes.get(selector)
        if name is None:
            return None
        return self.synthetic_styles.get(name)
