"""Tests for class usage collection and structural selector matching."""

from bs4 import BeautifulSoup

from htmlflow.engine.matcher import MatchResult, SelectorMatcher
from htmlflow.engine.usage import class_tokens, collect_used_classes


def soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


# ---------------------------------------------------------------------------
# Class usage
# ---------------------------------------------------------------------------


class TestClassTokens:
    def test_order_and_dedup(self):
        tag = soup('<div class="b a b c"></div>').div
        assert class_tokens(tag) == ["b", "a", "c"]

    def test_no_class(self):
        assert class_tokens(soup("<div></div>").div) == []


class TestCollectUsedClasses:
    def test_nested(self):
        doc = soup('<div class="a b"><p class="c">x</p><span class="a"></span></div>')
        assert collect_used_classes([doc.div]) == {"a", "b", "c"}

    def test_opaque_subtrees_skipped(self):
        doc = soup(
            '<div class="a">'
            '<script class="s"></script>'
            '<svg class="icon"><g class="inner"></g></svg>'
            "</div>"
        )
        assert collect_used_classes([doc.div]) == {"a"}

    def test_ignored_tags_skipped_but_entered(self):
        doc = soup(
            '<table class="t"><tr class="row"><td class="cell">'
            '<span class="c">x</span></td></tr></table>'
        )
        assert collect_used_classes([doc.table]) == {"t", "c"}

    def test_accumulates_into_existing_set(self):
        used = {"z"}
        result = collect_used_classes([soup('<p class="a"></p>').p], used)
        assert result is used
        assert used == {"a", "z"}


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestSelectorMatcher:
    def setup_method(self):
        self.doc = soup('<div class="hero"><a class="btn" href="#">Go</a></div>')
        self.link = self.doc.a
        self.matcher = SelectorMatcher()

    def test_match(self):
        assert self.matcher.match(".hero .btn", self.link) is MatchResult.MATCH
        assert self.matcher.match("div > a", self.link) is MatchResult.MATCH

    def test_no_match(self):
        assert self.matcher.match(".footer .btn", self.link) is MatchResult.NO_MATCH

    def test_pseudo_element_unsupported(self):
        assert self.matcher.match(".btn::before", self.link) is MatchResult.UNSUPPORTED

    def test_unknown_pseudo_class_unsupported(self):
        assert self.matcher.match(".btn:frobnicate", self.link) is MatchResult.UNSUPPORTED

    def test_dynamic_state_never_matches(self):
        assert self.matcher.match(".btn:hover", self.link) is MatchResult.NO_MATCH

    def test_compiled_once(self):
        first = self.matcher.compile(".btn")
        assert self.matcher.compile(".btn") is first

    def test_unsupported_cached(self):
        assert self.matcher.compile("a::after") is None
        assert "a::after" in self.matcher._compiled
