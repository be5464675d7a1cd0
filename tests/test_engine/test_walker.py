"""Tests for the tree walker."""

import itertools

from bs4 import BeautifulSoup

from htmlflow.config import ConverterConfig
from htmlflow.engine.session import ConversionSession
from htmlflow.engine.walker import TreeWalker, attributes, custom_attributes
from htmlflow.model.node import (
    Attribute,
    DomData,
    ElementNode,
    ElementType,
    EmbedNode,
    ListData,
    ListRole,
    TextNode,
)


def walk(markup: str, **config) -> tuple[ConversionSession, list[str]]:
    counter = itertools.count(1)
    session = ConversionSession(
        config=ConverterConfig(id_factory=lambda: f"id-{next(counter)}", **config)
    )
    soup = BeautifulSoup(markup, "html.parser")
    roots = [c for c in soup.children if c.name]
    return session, TreeWalker(session).walk(roots)


def by_id(session: ConversionSession, node_id: str):
    return next(n for n in session.nodes if n.id == node_id)


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


class TestAttributes:
    def test_class_excluded_and_order_kept(self):
        tag = BeautifulSoup('<x-card data-id="1" class="a" foo="bar" id="x"></x-card>', "html.parser").find("x-card")
        assert [a.name for a in attributes(tag)] == ["data-id", "foo", "id"]

    def test_custom_attributes(self):
        attrs = [
            Attribute("id", "x"),
            Attribute("href", "#"),
            Attribute("data-track", "1"),
            Attribute("aria-label", "Close"),
            Attribute("foo", "bar"),
        ]
        assert [a.name for a in custom_attributes(attrs)] == ["data-track", "aria-label", "foo"]


# ---------------------------------------------------------------------------
# Element mapping
# ---------------------------------------------------------------------------


class TestElementMapping:
    def test_heading_with_text(self):
        session, top = walk("<h3>  Title  </h3>")
        heading = by_id(session, top[0])
        assert heading.type is ElementType.HEADING
        assert heading.tag == "h3"
        text = by_id(session, heading.children[0])
        assert isinstance(text, TextNode)
        assert text.value == "Title"

    def test_inline_children_in_order(self):
        session, top = walk("<p>Hello <strong>world</strong> !</p>")
        p = by_id(session, top[0])
        kinds = [type(by_id(session, c)).__name__ for c in p.children]
        assert kinds == ["TextNode", "ElementNode", "TextNode"]
        assert by_id(session, p.children[1]).type is ElementType.STRONG

    def test_blank_text_dropped(self):
        session, top = walk("<div>\n   <span>x</span>\n</div>")
        div = by_id(session, top[0])
        assert len(div.children) == 1

    def test_comment_dropped(self):
        session, top = walk("<div><!-- note --></div>")
        assert by_id(session, top[0]).children == []

    def test_lists(self):
        session, top = walk("<ul><li>One</li></ul>")
        ul = by_id(session, top[0])
        li = by_id(session, ul.children[0])
        assert ul.type is ElementType.LIST
        assert isinstance(ul.data, ListData) and ul.data.role is ListRole.LIST
        assert li.type is ElementType.LIST_ITEM
        assert li.data.role is ListRole.ITEM

    def test_unknown_tag_becomes_dom_node(self):
        session, top = walk('<x-card data-id="1" foo="bar" id="x">t</x-card>')
        node = by_id(session, top[0])
        assert node.type is ElementType.DOM
        assert node.tag == "div"
        assert isinstance(node.data, DomData)
        assert node.data.tag == "x-card"
        assert [a.name for a in node.data.xattr] == ["data-id", "foo"]

    def test_script_and_svg_embedded(self):
        session, top = walk('<div><script>alert(1)</script><svg><circle r="1"></circle></svg></div>')
        div = by_id(session, top[0])
        script, svg = (by_id(session, c) for c in div.children)
        assert isinstance(script, EmbedNode) and script.script is True
        assert script.html == "<script>alert(1)</script>"
        assert isinstance(svg, EmbedNode) and svg.script is False
        assert svg.html.startswith("<svg>")
        # nothing inside the svg is walked
        assert len(session.nodes) == 3


class TestIgnoredTags:
    def test_children_hoisted(self):
        session, top = walk("<table><tr><td><p>Text</p></td></tr></table>")
        table = by_id(session, top[0])
        assert table.type is ElementType.DOM
        assert len(table.children) == 1
        assert by_id(session, table.children[0]).type is ElementType.PARAGRAPH

    def test_top_level_ignored_tag_hoists_many(self):
        session, top = walk("<tbody><tr><td><p>a</p></td><td><p>b</p></td></tr></tbody>")
        assert len(top) == 2

    def test_void_tags_produce_nothing(self):
        session, top = walk("<div>a<br>b<hr></div>")
        div = by_id(session, top[0])
        values = [by_id(session, c).value for c in div.children]
        assert values == ["a", "b"]


class TestSections:
    def test_content_wrapped(self):
        session, top = walk("<section><h2>T</h2><p>x</p></section>")
        section = by_id(session, top[0])
        assert len(section.children) == 1
        wrapper = by_id(session, section.children[0])
        assert isinstance(wrapper, ElementNode)
        assert wrapper.type is ElementType.BLOCK
        assert [by_id(session, c).tag for c in wrapper.children] == ["h2", "p"]

    def test_text_only_section_wrapped(self):
        session, top = walk("<section>Hello</section>")
        wrapper = by_id(session, by_id(session, top[0]).children[0])
        assert wrapper.type is ElementType.BLOCK

    def test_existing_container_not_wrapped(self):
        session, top = walk('<section><div class="container"><p>x</p></div></section>')
        section = by_id(session, top[0])
        child = by_id(session, section.children[0])
        assert child.type is ElementType.BLOCK
        assert by_id(session, child.children[0]).tag == "p"

    def test_empty_section_not_wrapped(self):
        session, top = walk("<section></section>")
        assert by_id(session, top[0]).children == []

    def test_wrapping_disabled(self):
        session, top = walk("<section><h2>T</h2></section>", wrap_sections=False)
        section = by_id(session, top[0])
        assert by_id(session, section.children[0]).type is ElementType.HEADING


class TestDeepNesting:
    def test_depth_beyond_recursion_limit(self):
        depth = 2000
        session, top = walk("<div>" * depth + "x" + "</div>" * depth)
        assert len(top) == 1
        assert len(session.nodes) == depth + 1
        node = by_id(session, top[0])
        for _ in range(depth - 1):
            node = by_id(session, node.children[0])
        assert by_id(session, node.children[0]).value == "x"
