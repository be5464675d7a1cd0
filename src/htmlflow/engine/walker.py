"""Tree walker: one top-down pass turning markup elements into schema nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from htmlflow.engine.matcher import MatchResult, SelectorMatcher
from htmlflow.engine.merge import StyleMergeResolver
from htmlflow.engine.session import ConversionSession
from htmlflow.engine.tags import IGNORED_TAGS, STANDARD_ATTRS, TAG_TYPES
from htmlflow.engine.usage import class_tokens
from htmlflow.model.node import (
    Attribute,
    DomData,
    ElementData,
    ElementNode,
    ElementType,
    EmbedNode,
    ImageData,
    LinkData,
    ListData,
    ListRole,
    SectionData,
    TextNode,
    block,
)

logger = logging.getLogger(__name__)


def attributes(tag: Tag) -> list[Attribute]:
    """All attributes except ``class``, in source order."""
    result: list[Attribute] = []
    for name, value in tag.attrs.items():
        if name.lower() == "class":
            continue
        if isinstance(value, list):
            value = " ".join(value)
        result.append(Attribute(name, "" if value is None else str(value)))
    return result


def custom_attributes(attrs: Iterable[Attribute]) -> list[Attribute]:
    """data-*, aria-* and any attribute outside the standard set."""
    return [
        a
        for a in attrs
        if a.name.lower().startswith(("data-", "aria-"))
        or a.name.lower() not in STANDARD_ATTRS
    ]


def _text(child: object) -> str | None:
    """The trimmed text of a plain text child, or None for anything else."""
    if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
        text = str(child).strip()
        return text or None
    return None


@dataclass
class _Frame:
    """An element whose children are still being walked.

    ``node`` is None for ignored tags (and the virtual root), whose
    collected ids are spliced into the parent instead.
    """

    node: ElementNode | None
    children: Iterator[PageElement]
    ids: list[str] = field(default_factory=list)
    wrap: bool = False


class TreeWalker:
    """Build nodes for a markup tree into *session*.

    The walk keeps its own stack of open elements, so nesting depth is not
    bounded by the interpreter's recursion limit. Each closed element
    contributes its ids to its parent's child list: one id normally, any
    number for ignored tags whose children are hoisted.
    """

    def __init__(self, session: ConversionSession) -> None:
        self.session = session
        self.matcher = SelectorMatcher()
        self.resolver = StyleMergeResolver(session)

    def walk(self, roots: Iterable[Tag]) -> list[str]:
        """Visit *roots* in order and return the top-level node ids."""
        base = _Frame(node=None, children=iter(list(roots)))
        stack = [base]
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)
            if child is None:
                stack.pop()
                if stack:
                    stack[-1].ids.extend(self._close(frame))
                continue
            if isinstance(child, Tag):
                opened = self._open(child)
                if isinstance(opened, _Frame):
                    stack.append(opened)
                else:
                    frame.ids.extend(opened)
            elif frame.node is not None:
                text = _text(child)
                if text is not None:
                    node = TextNode(id=self.session.new_id(), value=text)
                    self.session.add_node(node)
                    frame.ids.append(node.id)
        logger.debug(
            "Walked markup into %d top-level nodes (%d total)",
            len(base.ids),
            len(self.session.nodes),
        )
        return base.ids

    def _open(self, tag: Tag) -> _Frame | list[str]:
        """Start an element: a frame to walk, or finished ids for leaves."""
        name = tag.name.lower()

        if name in IGNORED_TAGS:
            elements = (c for c in tag.children if isinstance(c, Tag))
            return _Frame(node=None, children=elements)

        if name in ("script", "svg"):
            embed = EmbedNode(id=self.session.new_id(), html=str(tag), script=name == "script")
            self.session.add_node(embed)
            return [embed.id]

        classes = self._resolve_classes(tag)
        element_type = TAG_TYPES.get(name)
        if element_type is None:
            node = self._dom_node(tag, name, classes)
            return _Frame(node=node, children=iter(list(tag.children)))
        node = self._element_node(tag, name, element_type, classes)
        wrap = element_type is ElementType.SECTION and self._needs_wrapper(tag)
        return _Frame(node=node, children=iter(list(tag.children)), wrap=wrap)

    def _close(self, frame: _Frame) -> list[str]:
        """Finish an element once all its children are walked."""
        node = frame.node
        if node is None:
            return frame.ids
        if frame.wrap:
            wrapper = block(self.session.new_id(), frame.ids)
            self.session.add_node(wrapper)
            node.children = [wrapper.id]
        else:
            node.children = frame.ids
        self.session.add_node(node)
        return [node.id]

    # ---- classes -----------------------------------------------------------

    def _resolve_classes(self, tag: Tag) -> list[str]:
        literal_ids = [
            self.session.class_styles[c]
            for c in class_tokens(tag)
            if c in self.session.class_styles
        ]
        attached_ids: list[str] = []
        for selector in self.session.complex_rules:
            result = self.matcher.match(selector, tag)
            if result is MatchResult.MATCH:
                self.resolver.resolve(literal_ids, attached_ids, selector)
        return literal_ids + attached_ids

    # ---- nodes -------------------------------------------------------------

    def _dom_node(self, tag: Tag, name: str, classes: list[str]) -> ElementNode:
        attrs = attributes(tag)
        return ElementNode(
            id=self.session.new_id(),
            type=ElementType.DOM,
            tag="div",
            data=DomData(tag=name, attributes=attrs, xattr=custom_attributes(attrs)),
            classes=classes,
        )

    def _element_node(
        self, tag: Tag, name: str, element_type: ElementType, classes: list[str]
    ) -> ElementNode:
        return ElementNode(
            id=self.session.new_id(),
            type=element_type,
            tag=name,
            data=self._payload(tag, name, element_type),
            classes=classes,
        )

    def _payload(self, tag: Tag, name: str, element_type: ElementType) -> ElementData:
        common = {
            "tag": name,
            "element_id": tag.get("id") or "",
            "xattr": custom_attributes(attributes(tag)),
        }
        if element_type is ElementType.SECTION:
            return SectionData(**common)
        if element_type is ElementType.LINK:
            return LinkData(
                **common,
                href=tag.get("href") or "#",
                target=tag.get("target") or "_self",
            )
        if element_type is ElementType.IMAGE:
            return ImageData(
                **common,
                asset_id=self.session.new_id(),
                src=tag.get("src") or "",
                alt=tag.get("alt") or "",
                loading=tag.get("loading") or "lazy",
                width=tag.get("width") or "auto",
                height=tag.get("height") or "auto",
            )
        if element_type is ElementType.LIST:
            return ListData(**common, role=ListRole.LIST)
        if element_type is ElementType.LIST_ITEM:
            return ListData(**common, role=ListRole.ITEM)
        return ElementData(**common)

    def _needs_wrapper(self, tag: Tag) -> bool:
        """A section is wrapped unless a direct ``div.container`` child exists."""
        if not self.session.config.wrap_sections:
            return False
        container = self.session.config.section_container_class
        has_content = False
        for child in tag.children:
            if isinstance(child, Tag):
                if child.name == "div" and container in class_tokens(child):
                    return False
                has_content = True
            elif _text(child) is not None:
                has_content = True
        return has_content
