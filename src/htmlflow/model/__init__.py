"""Htmlflow model layer -- public type re-exports."""

from htmlflow.model.diagnostic import Diagnostic, Severity
from htmlflow.model.document import META_COUNTERS, ClipboardDocument
from htmlflow.model.node import (
    Attribute,
    DomData,
    ElementData,
    ElementNode,
    ElementType,
    EmbedNode,
    ImageData,
    LinkData,
    LinkMode,
    ListData,
    ListRole,
    Node,
    SectionData,
    TextNode,
)
from htmlflow.model.style import Style

__all__ = [
    # node
    "ElementType",
    "LinkMode",
    "ListRole",
    "Attribute",
    "ElementData",
    "SectionData",
    "LinkData",
    "ImageData",
    "ListData",
    "DomData",
    "ElementNode",
    "TextNode",
    "EmbedNode",
    "Node",
    # style
    "Style",
    # document
    "ClipboardDocument",
    "META_COUNTERS",
    # diagnostic
    "Severity",
    "Diagnostic",
]
