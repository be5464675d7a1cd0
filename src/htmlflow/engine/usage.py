"""Class usage filter: which literal class names the markup references."""

from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from htmlflow.engine.tags import IGNORED_TAGS, OPAQUE_TAGS


def class_tokens(tag: Tag) -> list[str]:
    """Return the element's class tokens in order, without duplicates."""
    value = tag.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return list(dict.fromkeys(value))


def collect_used_classes(roots: Iterable[Tag], used: set[str] | None = None) -> set[str]:
    """Record every class token on non-ignored elements under *roots*.

    ``script``, ``svg`` and ``style`` subtrees are not entered.
    """
    used = set() if used is None else used
    stack = [t for t in reversed(list(roots)) if isinstance(t, Tag)]
    while stack:
        tag = stack.pop()
        if tag.name in OPAQUE_TAGS:
            continue
        if tag.name not in IGNORED_TAGS:
            used.update(class_tokens(tag))
        stack.extend(c for c in reversed(tag.contents) if isinstance(c, Tag))
    return used
