"""Tests for relocated-CSS composition and graph finalization."""

import itertools

import pytest

from htmlflow.config import ConverterConfig
from htmlflow.engine.finalizer import compose_relocated_css, finalize, order_nodes
from htmlflow.engine.session import ConversionSession
from htmlflow.errors import ValidationError
from htmlflow.model.node import ElementType, EmbedNode, TextNode, block


def make_session() -> ConversionSession:
    counter = itertools.count(1)
    return ConversionSession(config=ConverterConfig(id_factory=lambda: f"id-{next(counter)}"))


# ---------------------------------------------------------------------------
# Relocated CSS
# ---------------------------------------------------------------------------


class TestComposeRelocatedCss:
    def test_empty(self):
        assert compose_relocated_css("", []) == ""

    def test_advanced_only(self):
        assert compose_relocated_css("body {\n  margin: 0;\n}", []) == "body {\n  margin: 0;\n}"

    def test_unused_only(self):
        assert compose_relocated_css("", [".x { top: 0; }"]) == (
            "\n/* Unused Classes */\n.x { top: 0; }"
        )

    def test_both(self):
        result = compose_relocated_css("@import url(a.css);", [".x { top: 0; }", ".y { left: 0; }"])
        assert result == (
            "@import url(a.css);\n\n/* Unused Classes */\n.x { top: 0; }\n.y { left: 0; }"
        )


# ---------------------------------------------------------------------------
# Node ordering
# ---------------------------------------------------------------------------


class TestOrderNodes:
    def test_pre_order_from_root(self):
        text = TextNode(id="t", value="Hi")
        inner = block("p", ["t"])
        sibling = block("s")
        root = block("r", ["p", "s"])
        ordered = order_nodes([text, inner, sibling, root], "r")
        assert [n.id for n in ordered] == ["r", "p", "t", "s"]

    def test_unreached_nodes_appended(self):
        orphan = block("o")
        root = block("r")
        ordered = order_nodes([orphan, root], "r")
        assert [n.id for n in ordered] == ["r", "o"]


# ---------------------------------------------------------------------------
# Finalize
# ---------------------------------------------------------------------------


class TestFinalize:
    def test_no_top_level_nodes(self):
        session = make_session()
        document = finalize(session, [])
        assert len(document.nodes) == 1
        assert document.root.type is ElementType.BLOCK
        assert document.root.children == []

    def test_single_top_level_node_is_root(self):
        session = make_session()
        node = session.add_node(block(session.new_id()))
        document = finalize(session, [node.id])
        assert document.root is node
        assert len(document.nodes) == 1

    def test_many_top_level_nodes_wrapped(self):
        session = make_session()
        a = session.add_node(block(session.new_id()))
        b = session.add_node(block(session.new_id()))
        document = finalize(session, [a.id, b.id])
        assert document.root.children == [a.id, b.id]
        assert [n.id for n in document.nodes][1:] == [a.id, b.id]

    def test_relocated_css_embed_is_last_sibling(self):
        session = make_session()
        a = session.add_node(block(session.new_id()))
        document = finalize(session, [a.id], "body { margin: 0; }")
        assert len(document.root.children) == 2
        embed = document.node(document.root.children[-1])
        assert isinstance(embed, EmbedNode)
        assert embed.html == "<style>\nbody { margin: 0; }\n</style>"
        assert embed.script is False

    def test_schema_type_from_config(self):
        document = finalize(make_session(), [])
        assert document.to_dict()["type"] == "@webflow/XscpData"

    def test_dangling_child_rejected(self):
        session = make_session()
        node = session.add_node(block(session.new_id(), ["missing"]))
        with pytest.raises(ValidationError) as exc_info:
            finalize(session, [node.id])
        assert exc_info.value.diagnostics[0].rule == "child_references"
