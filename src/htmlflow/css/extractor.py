"""Advanced-CSS extractor: constructs with no per-element style equivalent.

Every top-level rule is assigned to at most one category by a priority
classifier, and categories are emitted in priority order, so no rule is
relocated twice.
"""

from __future__ import annotations

from enum import IntEnum

import tinycss2

from htmlflow.css.normalizer import selector_text, source_text
from htmlflow.css.selector import analyze_selector

__all__ = ["RuleCategory", "classify_rule", "extract_advanced_css"]

# Block at-rules that wrap ordinary rules and cannot be expressed per element.
OTHER_BLOCK_AT_RULES = frozenset({"supports", "container", "layer", "page", "document"})


class RuleCategory(IntEnum):
    """Relocation categories, in emission order."""

    ROOT = 1
    MEDIA = 2
    ATTRIBUTE = 3
    LOGICAL_PSEUDO = 4
    GLOBAL = 5
    KEYFRAMES = 6
    FONT_FACE = 7
    IMPORT = 8
    OTHER_AT_RULE = 9


def classify_rule(rule: tinycss2.ast.Node) -> RuleCategory | None:
    """Return the relocation category of a top-level rule, or None to keep it."""
    if rule.type == "at-rule":
        keyword = rule.lower_at_keyword
        if keyword == "media":
            return RuleCategory.MEDIA
        if keyword.endswith("keyframes"):
            return RuleCategory.KEYFRAMES
        if keyword == "font-face":
            return RuleCategory.FONT_FACE
        if keyword == "import":
            return RuleCategory.IMPORT
        if keyword in OTHER_BLOCK_AT_RULES and rule.content is not None:
            return RuleCategory.OTHER_AT_RULE
        return None

    if rule.type != "qualified-rule":
        return None
    info = analyze_selector(selector_text(rule))
    if info.is_root:
        return RuleCategory.ROOT
    if info.has_attribute:
        return RuleCategory.ATTRIBUTE
    if info.has_logical_pseudo:
        return RuleCategory.LOGICAL_PSEUDO
    if info.is_global:
        return RuleCategory.GLOBAL
    return None


def _render(rule: tinycss2.ast.Node, category: RuleCategory) -> str:
    if category in (RuleCategory.ATTRIBUTE, RuleCategory.LOGICAL_PSEUDO, RuleCategory.GLOBAL):
        body = source_text(rule.content).strip()
        return f"{selector_text(rule)} {{\n  {body}\n}}"
    if rule.type == "at-rule":
        head = f"@{rule.at_keyword}{source_text(rule.prelude)}"
        if rule.content is None:
            return f"{head.rstrip()};"
        return f"{head}{{{source_text(rule.content)}}}"
    return f"{source_text(rule.prelude)}{{{source_text(rule.content)}}}".strip()


def extract_advanced_css(css: str) -> str:
    """Collect relocatable rules from *css* as one text blob.

    Order: ``:root`` blocks, ``@media`` blocks, attribute-selector rules,
    logical pseudo-class rules, global element rules, ``@keyframes``,
    ``@font-face``, ``@import``, then other block at-rules.
    """
    buckets: dict[RuleCategory, list[str]] = {c: [] for c in RuleCategory}
    for rule in tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True):
        category = classify_rule(rule)
        if category is not None:
            buckets[category].append(_render(rule, category))
    return "\n\n".join(text for category in RuleCategory for text in buckets[category])
