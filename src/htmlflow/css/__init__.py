from htmlflow.css.extractor import RuleCategory, classify_rule, extract_advanced_css
from htmlflow.css.normalizer import (
    expand_shorthand,
    merge_rules,
    normalize_stylesheet,
    parse_custom_properties,
    wrap_raw_value,
)
from htmlflow.css.selector import SelectorInfo, analyze_selector, parse_selector

__all__ = [
    "normalize_stylesheet",
    "merge_rules",
    "expand_shorthand",
    "wrap_raw_value",
    "parse_custom_properties",
    "extract_advanced_css",
    "classify_rule",
    "RuleCategory",
    "parse_selector",
    "analyze_selector",
    "SelectorInfo",
]
