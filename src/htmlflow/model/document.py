"""Document model: the clipboard payload handed back to callers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from htmlflow.model.node import Node
from htmlflow.model.style import Style

# Removal counters reported by the target tool. A converted document never
# removes anything, so every counter is zero.
META_COUNTERS = (
    "droppedLinks",
    "dynBindRemovedCount",
    "dynListBindRemovedCount",
    "paginationRemovedCount",
    "universalBindingsRemovedCount",
    "unlinkedSymbolCount",
    "codeComponentsRemovedCount",
)


@dataclass
class ClipboardDocument:
    """A finished conversion: root-first node list plus the style list."""

    schema_type: str
    nodes: list[Node] = field(default_factory=list)
    styles: list[Style] = field(default_factory=list)
    custom_properties: dict[str, str] = field(default_factory=dict)

    @property
    def root(self) -> Node:
        return self.nodes[0]

    def node(self, node_id: str) -> Node | None:
        """Return the node with *node_id*, or None."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def style(self, name: str) -> Style | None:
        """Return the style named *name*, or None."""
        for style in self.styles:
            if style.name == name:
                return style
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.schema_type,
            "payload": {
                "nodes": [n.to_dict() for n in self.nodes],
                "styles": [s.to_dict() for s in self.styles],
                "assets": [],
                "ix1": [],
                "ix2": {"interactions": [], "events": [], "actionLists": []},
            },
            "meta": {name: 0 for name in META_COUNTERS},
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
