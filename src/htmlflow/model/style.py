"""Style model: one named, reusable declaration set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Style:
    """A class style referenced by identifier from element nodes.

    ``style_less`` is the flat declaration string. ``variants`` maps a
    breakpoint name to its own declaration string.
    """

    id: str
    name: str
    style_less: str = ""
    created_by: str = ""
    variants: dict[str, str] = field(default_factory=dict)

    def append(self, declarations: str) -> None:
        """Append *declarations* to the end of the declaration string."""
        self.style_less = f"{self.style_less} {declarations}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "fake": False,
            "type": "class",
            "name": self.name,
            "namespace": "",
            "comb": "",
            "styleLess": self.style_less,
            "variants": {k: {"styleLess": v} for k, v in self.variants.items()},
            "children": [],
            "createdBy": self.created_by,
            "origin": None,
            "selector": None,
        }
