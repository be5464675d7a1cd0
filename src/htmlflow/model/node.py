"""Node model: element, text, and embed nodes of the clipboard graph.

Element payloads are a tagged union keyed by :class:`ElementType`; each
variant only carries the fields its element type needs and knows how to
render itself into the schema's ``data`` object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Union


class ElementType(StrEnum):
    """Target element types understood by the design tool."""

    BLOCK = "Block"
    SECTION = "Section"
    HEADING = "Heading"
    PARAGRAPH = "Paragraph"
    LINK = "Link"
    IMAGE = "Image"
    LIST = "List"
    LIST_ITEM = "ListItem"
    STRONG = "Strong"
    EMPHASIZED = "Emphasized"
    BLOCKQUOTE = "Blockquote"
    FIGURE = "Figure"
    FIGCAPTION = "Figcaption"
    DOM = "DOM"
    HTML_EMBED = "HtmlEmbed"


class LinkMode(StrEnum):
    SECTION = "section"
    EMAIL = "email"
    PHONE = "phone"
    EXTERNAL = "external"

    @classmethod
    def from_href(cls, href: str) -> LinkMode:
        """Derive the link mode from the scheme of *href*."""
        if href.startswith("#"):
            return cls.SECTION
        if href.startswith("mailto:"):
            return cls.EMAIL
        if href.startswith("tel:"):
            return cls.PHONE
        return cls.EXTERNAL


class ListRole(StrEnum):
    LIST = "list"
    ITEM = "item"


@dataclass(frozen=True)
class Attribute:
    """A single markup attribute, kept in source order."""

    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


def _devlink() -> dict[str, Any]:
    return {"runtimeProps": {}, "slot": ""}


# ---------------------------------------------------------------------------
# Element payloads
# ---------------------------------------------------------------------------


@dataclass
class ElementData:
    """Payload shared by every semantic element type."""

    tag: str
    element_id: str = ""
    xattr: list[Attribute] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": False,
            "tag": self.tag,
            "devlink": _devlink(),
            "displayName": "",
            "attr": {"id": self.element_id},
            "xattr": [a.to_dict() for a in self.xattr],
            "search": {"exclude": False},
            "visibility": {"conditions": []},
        }


@dataclass
class SectionData(ElementData):
    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["grid"] = {"type": "section"}
        return data


@dataclass
class LinkData(ElementData):
    href: str = "#"
    target: str = "_self"

    @property
    def mode(self) -> LinkMode:
        return LinkMode.from_href(self.href)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["link"] = {
            "mode": str(self.mode),
            "href": self.href,
            "target": self.target,
        }
        data["button"] = False
        data["block"] = "inline"
        data["eventIds"] = []
        return data


@dataclass
class ImageData(ElementData):
    asset_id: str = ""
    src: str = ""
    alt: str = ""
    loading: str = "lazy"
    width: str = "auto"
    height: str = "auto"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["img"] = {"id": self.asset_id}
        data["srcsetDisabled"] = False
        data["sizes"] = []
        data["attr"] = {
            "id": self.element_id,
            "src": self.src,
            "alt": self.alt,
            "loading": self.loading,
            "width": self.width,
            "height": self.height,
        }
        return data


@dataclass
class ListData(ElementData):
    role: ListRole = ListRole.LIST

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.role is ListRole.LIST:
            data["list"] = {"type": "list", "unstyled": False}
        else:
            data["list"] = {"type": "item"}
        return data


@dataclass
class DomData:
    """Payload for passthrough elements whose tag has no semantic type."""

    tag: str
    attributes: list[Attribute] = field(default_factory=list)
    xattr: list[Attribute] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "attributes": [a.to_dict() for a in self.attributes],
            "devlink": _devlink(),
            "displayName": "",
            "xattr": [a.to_dict() for a in self.xattr],
            "search": {"exclude": False},
            "visibility": {"conditions": []},
        }


Payload = Union[ElementData, DomData]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass
class ElementNode:
    """An element node; children and classes are identifier references."""

    id: str
    type: ElementType
    tag: str
    data: Payload
    classes: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "type": str(self.type),
            "tag": self.tag,
            "classes": list(self.classes),
            "children": list(self.children),
            "data": self.data.to_dict(),
        }


@dataclass
class TextNode:
    """A literal text run."""

    id: str
    value: str

    @property
    def children(self) -> list[str]:
        return []

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.id, "text": True, "v": self.value}


@dataclass
class EmbedNode:
    """Verbatim markup: scripts, inline SVG, or relocated stylesheet text."""

    id: str
    html: str
    script: bool = False

    @property
    def children(self) -> list[str]:
        return []

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "type": str(ElementType.HTML_EMBED),
            "tag": "div",
            "classes": [],
            "children": [],
            "v": self.html,
            "data": {
                "search": {"exclude": True},
                "embed": {
                    "meta": {
                        "html": self.html,
                        "div": False,
                        "script": self.script,
                        "compilable": False,
                        "iframe": False,
                    },
                    "type": "html",
                },
                "insideRTE": False,
                "devlink": _devlink(),
                "displayName": "",
                "attr": {"id": ""},
                "xattr": [],
                "visibility": {"conditions": []},
            },
        }


Node = Union[ElementNode, TextNode, EmbedNode]


def block(node_id: str, children: list[str] | None = None) -> ElementNode:
    """Build a bare generic container, used for synthesized wrappers."""
    return ElementNode(
        id=node_id,
        type=ElementType.BLOCK,
        tag="div",
        data=ElementData(tag="div"),
        children=list(children or []),
    )
