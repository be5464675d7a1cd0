"""Graph finalizer: single root, root-first depth-first node order."""

from __future__ import annotations

from htmlflow.engine.session import ConversionSession
from htmlflow.model.document import ClipboardDocument
from htmlflow.model.node import EmbedNode, Node, block
from htmlflow.validation import validate_or_raise

UNUSED_CLASSES_HEADER = "/* Unused Classes */"


def compose_relocated_css(advanced_css: str, unused_rules: list[str]) -> str:
    """Join extracted advanced CSS and unused class rules into one blob."""
    parts: list[str] = []
    if advanced_css:
        parts.append(advanced_css)
    if unused_rules:
        parts.append(f"\n{UNUSED_CLASSES_HEADER}")
        parts.append("\n".join(unused_rules))
    return "\n".join(parts)


def order_nodes(nodes: list[Node], root_id: str) -> list[Node]:
    """Depth-first pre-order from *root_id*; unreached nodes follow in creation order."""
    by_id = {n.id: n for n in nodes}
    ordered: list[Node] = []
    visited: set[str] = set()
    stack = [root_id]
    while stack:
        nid = stack.pop()
        if nid in visited or nid not in by_id:
            continue
        visited.add(nid)
        node = by_id[nid]
        ordered.append(node)
        stack.extend(reversed(node.children))
    ordered.extend(n for n in nodes if n.id not in visited)
    return ordered


def finalize(
    session: ConversionSession, top_level: list[str], relocated_css: str = ""
) -> ClipboardDocument:
    """Assemble the document from the walked top-level ids.

    Relocated CSS becomes a passive embed appended as the last top-level
    sibling. Zero top-level nodes yield an empty container root; more than
    one are wrapped in a synthesized container.
    """
    top_level = list(top_level)
    if relocated_css:
        embed = EmbedNode(id=session.new_id(), html=f"<style>\n{relocated_css}\n</style>")
        session.add_node(embed)
        top_level.append(embed.id)

    if len(top_level) == 1:
        root_id = top_level[0]
    else:
        root = block(session.new_id(), top_level)
        session.add_node(root)
        root_id = root.id

    document = ClipboardDocument(
        schema_type=session.config.schema_type,
        nodes=order_nodes(session.nodes, root_id),
        styles=list(session.styles),
        custom_properties=dict(session.custom_properties),
    )
    validate_or_raise(document.to_dict())
    return document
