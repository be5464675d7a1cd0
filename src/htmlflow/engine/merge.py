"""Style merge resolver: fold matched complex rules into element styles."""

from __future__ import annotations

import logging
from enum import Enum

from htmlflow.engine.session import ConversionSession

logger = logging.getLogger(__name__)


class MergeOutcome(Enum):
    MERGED = "merged"
    ALREADY_MERGED = "already_merged"
    ATTACHED = "attached"
    ALREADY_ATTACHED = "already_attached"


class StyleMergeResolver:
    """Decide where a matched complex selector's declarations go.

    An element with a literal class style gets the declarations appended to
    its first such style, once per (style, selector) pair. An element without
    one gets the selector's synthetic style attached instead.
    """

    def __init__(self, session: ConversionSession) -> None:
        self.session = session

    def resolve(
        self, literal_ids: list[str], attached_ids: list[str], selector: str
    ) -> MergeOutcome:
        """Apply *selector* to an element.

        *literal_ids* are the element's class style ids; *attached_ids* is
        the element's synthetic style list and is extended in place.
        """
        if literal_ids:
            target_id = literal_ids[0]
            key = (target_id, selector)
            if key in self.session.merged_pairs:
                return MergeOutcome.ALREADY_MERGED
            style = self.session.styles_by_id[target_id]
            style.append(self.session.complex_rules[selector])
            self.session.merged_pairs.add(key)
            logger.debug("Merged %r into style %r", selector, style.name)
            return MergeOutcome.MERGED

        style_id = self.session.synthetic_style_id(selector)
        if style_id is None or style_id in attached_ids:
            return MergeOutcome.ALREADY_ATTACHED
        attached_ids.append(style_id)
        return MergeOutcome.ATTACHED
