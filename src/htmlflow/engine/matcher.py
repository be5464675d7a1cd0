"""Structural selector matching against parsed markup."""

from __future__ import annotations

import logging
from enum import Enum

import soupsieve
from bs4 import Tag

logger = logging.getLogger(__name__)


class MatchResult(Enum):
    """Outcome of testing one selector against one element."""

    MATCH = "match"
    NO_MATCH = "no_match"
    UNSUPPORTED = "unsupported"


class SelectorMatcher:
    """Compile each selector once and test it against elements.

    Selectors soupsieve cannot evaluate (pseudo-elements, unknown
    pseudo-classes) report UNSUPPORTED for every element and are logged once.
    """

    def __init__(self) -> None:
        self._compiled: dict[str, soupsieve.SoupSieve | None] = {}

    def compile(self, selector: str) -> soupsieve.SoupSieve | None:
        if selector not in self._compiled:
            try:
                self._compiled[selector] = soupsieve.compile(selector)
            except (soupsieve.SelectorSyntaxError, NotImplementedError) as exc:
                logger.debug("Selector %r cannot be matched: %s", selector, exc)
                self._compiled[selector] = None
        return self._compiled[selector]

    def match(self, selector: str, tag: Tag) -> MatchResult:
        pattern = self.compile(selector)
        if pattern is None:
            return MatchResult.UNSUPPORTED
        return MatchResult.MATCH if pattern.match(tag) else MatchResult.NO_MATCH
