"""Stylesheet normalizer: CSS text to flat per-selector declaration strings.

Example:
    .card { padding: 10px 20px; width: calc(100% - 2rem); }

becomes::

    {".card": "padding-top: 10px; padding-right: 20px; padding-bottom: 10px;"
              " padding-left: 20px; width: @raw<|calc(100% - 2rem)|>;"}

At-rules are skipped entirely; their bodies are relocated verbatim by the
extractor instead.
"""

from __future__ import annotations

import re

import tinycss2

__all__ = [
    "RAW_MARKERS",
    "expand_shorthand",
    "merge_rules",
    "normalize_stylesheet",
    "parse_custom_properties",
    "selector_text",
    "source_text",
    "wrap_raw_value",
]

# Value fragments the target tool must never reinterpret.
RAW_MARKERS = ("var(--", "calc(", "clamp(", "min(", "max(")

_COLOR_WORD_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)

_BOX_SIDES = ("top", "right", "bottom", "left")


def wrap_raw_value(value: str) -> str:
    """Wrap *value* in the ``@raw<|...|>`` marker if it holds an opaque function."""
    value = value.strip()
    if any(marker in value for marker in RAW_MARKERS):
        return f"@raw<|{value}|>"
    return value


def _declare(pairs: list[tuple[str, str]], suffix: str = "") -> str:
    return " ".join(f"{name}: {value}{suffix};" for name, value in pairs)


def _box(prop: str, values: list[str], suffix: str) -> str | None:
    if len(values) == 1:
        sides = [values[0]] * 4
    elif len(values) == 2:
        sides = [values[0], values[1], values[0], values[1]]
    elif len(values) == 3:
        sides = [values[0], values[1], values[2], values[1]]
    elif len(values) == 4:
        sides = values
    else:
        return None
    return _declare([(f"{prop}-{side}", v) for side, v in zip(_BOX_SIDES, sides)], suffix)


def _radius(values: list[str], suffix: str) -> str | None:
    if "/" in values:
        return None
    if len(values) == 1:
        corners = [
            ("top-left", values[0]),
            ("top-right", values[0]),
            ("bottom-left", values[0]),
            ("bottom-right", values[0]),
        ]
    elif len(values) == 2:
        corners = [
            ("top-left", values[0]),
            ("top-right", values[1]),
            ("bottom-right", values[0]),
            ("bottom-left", values[1]),
        ]
    elif len(values) == 4:
        corners = [
            ("top-left", values[0]),
            ("top-right", values[1]),
            ("bottom-right", values[2]),
            ("bottom-left", values[3]),
        ]
    else:
        return None
    return _declare([(f"border-{corner}-radius", v) for corner, v in corners], suffix)


def expand_shorthand(prop: str, value: str, important: bool = False) -> str:
    """Expand a shorthand declaration into long-form declarations.

    *value* is the bare value; with *important* every resulting declaration
    carries ``!important``. Unknown properties, and shorthand forms with an
    unsupported number of values, pass through as ``prop: value;``.
    """
    value = value.strip()
    values = value.split()
    key = prop.lower()
    suffix = " !important" if important else ""
    expanded: str | None = None

    if key in ("margin", "padding"):
        expanded = _box(key, values, suffix)
    elif key == "border-radius":
        expanded = _radius(values, suffix)
    elif key == "gap" and values:
        column = values[0]
        row = values[1] if len(values) > 1 else column
        expanded = _declare([("grid-column-gap", column), ("grid-row-gap", row)], suffix)
    elif key == "background":
        if value.startswith("#") or value.startswith("rgb") or _COLOR_WORD_RE.match(value):
            expanded = _declare([("background-color", value)], suffix)

    return expanded if expanded is not None else f"{prop}: {value}{suffix};"


_BRACKETS = {"() block": "()", "[] block": "[]", "{} block": "{}"}


def source_text(nodes: list[tinycss2.ast.Node]) -> str:
    """Serialize component values keeping strings as they were written.

    ``tinycss2.serialize`` re-quotes strings and decodes their escapes;
    string tokens here are emitted from their source representation.
    """
    parts: list[str] = []
    for node in nodes:
        if node.type == "string":
            parts.append(node.representation)
        elif node.type == "function":
            parts.append(f"{node.name}({source_text(node.arguments)})")
        elif node.type in _BRACKETS:
            opening, closing = _BRACKETS[node.type]
            parts.append(f"{opening}{source_text(node.content)}{closing}")
        else:
            parts.append(node.serialize())
    return "".join(parts)


def _declaration_text(declaration: tinycss2.ast.Declaration) -> str:
    value = source_text(declaration.value).strip()
    if declaration.important:
        value = f"{value} !important"
    return value


def _normalize_declarations(content: list[tinycss2.ast.Node]) -> str:
    parts: list[str] = []
    for item in tinycss2.parse_declaration_list(
        content, skip_comments=True, skip_whitespace=True
    ):
        if item.type != "declaration":
            continue
        value = source_text(item.value).strip()
        raw = wrap_raw_value(value)
        if raw.startswith("@raw<|"):
            suffix = " !important" if item.important else ""
            parts.append(f"{item.name}: {raw}{suffix};")
        else:
            parts.append(expand_shorthand(item.name, value, important=item.important))
    return " ".join(p for p in parts if p)


def selector_text(rule: tinycss2.ast.QualifiedRule) -> str:
    """Serialize a rule prelude with whitespace collapsed."""
    return " ".join(source_text(rule.prelude).split())


def merge_rules(base: dict[str, str], extra: dict[str, str]) -> dict[str, str]:
    """Concatenate *extra*'s declarations onto *base* per selector, in place."""
    for selector, declarations in extra.items():
        if selector in base:
            base[selector] = f"{base[selector]} {declarations}"
        else:
            base[selector] = declarations
    return base


def normalize_stylesheet(css: str) -> dict[str, str]:
    """Parse CSS text into a selector -> declaration-string mapping.

    Declarations keep source order and are not deduplicated. A selector that
    appears more than once has its declaration strings concatenated.
    """
    rules: dict[str, str] = {}
    for rule in tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True):
        if rule.type != "qualified-rule":
            continue
        selector = selector_text(rule)
        if not selector or selector.startswith("@"):
            continue
        declarations = _normalize_declarations(rule.content)
        if declarations:
            merge_rules(rules, {selector: declarations})
    return rules


def parse_custom_properties(css: str) -> dict[str, str]:
    """Collect ``--name: value`` declarations from ``:root`` rules."""
    variables: dict[str, str] = {}
    for rule in tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True):
        if rule.type != "qualified-rule" or not selector_text(rule).endswith(":root"):
            continue
        for item in tinycss2.parse_declaration_list(
            rule.content, skip_comments=True, skip_whitespace=True
        ):
            if item.type == "declaration" and item.name.startswith("--"):
                variables[item.name] = _declaration_text(item)
    return variables
