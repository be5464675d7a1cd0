"""Tag tables shared by the usage filter and the tree walker."""

from __future__ import annotations

from htmlflow.model.node import ElementType

TAG_TYPES: dict[str, ElementType] = {
    "div": ElementType.BLOCK,
    "section": ElementType.SECTION,
    "header": ElementType.BLOCK,
    "footer": ElementType.BLOCK,
    "main": ElementType.BLOCK,
    "article": ElementType.BLOCK,
    "aside": ElementType.BLOCK,
    "nav": ElementType.BLOCK,
    "h1": ElementType.HEADING,
    "h2": ElementType.HEADING,
    "h3": ElementType.HEADING,
    "h4": ElementType.HEADING,
    "h5": ElementType.HEADING,
    "h6": ElementType.HEADING,
    "p": ElementType.PARAGRAPH,
    "a": ElementType.LINK,
    "span": ElementType.BLOCK,
    "img": ElementType.IMAGE,
    "ul": ElementType.LIST,
    "ol": ElementType.LIST,
    "li": ElementType.LIST_ITEM,
    "strong": ElementType.STRONG,
    "b": ElementType.STRONG,
    "em": ElementType.EMPHASIZED,
    "i": ElementType.EMPHASIZED,
    "blockquote": ElementType.BLOCKQUOTE,
    "figure": ElementType.FIGURE,
    "figcaption": ElementType.FIGCAPTION,
    "button": ElementType.BLOCK,
    "form": ElementType.BLOCK,
    "input": ElementType.BLOCK,
    "label": ElementType.BLOCK,
    "textarea": ElementType.BLOCK,
    "select": ElementType.BLOCK,
}

# Elements that produce no node of their own; their element children are
# hoisted into the parent.
IGNORED_TAGS = frozenset({
    # document
    "html", "head", "body", "meta", "link", "title", "base",
    "noscript", "template", "slot",
    # table sections
    "colgroup", "col", "caption", "thead", "tbody", "tfoot", "tr", "th", "td",
    # void
    "br", "hr", "wbr", "area", "map", "track", "source", "param",
    # media embeds
    "object", "embed", "portal", "picture",
})

# Subtrees kept verbatim; their content is never classified.
OPAQUE_TAGS = frozenset({"script", "svg", "style"})

# Attributes with dedicated handling; anything else is a custom attribute.
STANDARD_ATTRS = frozenset({
    "class", "id", "style", "src", "alt", "href", "target", "width", "height",
    "loading", "type", "name", "value", "placeholder", "disabled", "readonly",
    "checked", "selected", "for", "action", "method", "enctype", "rel", "media",
})
