"""TreeBuilder: converts a live source tree into a layout-annotated snapshot.

Uses a single recursive, top-down traversal.  Each visited source node yields
one SnapshotNode carrying its depth and its horizontal interval; children
split their parent's interval equally, in source order.  Sibling links are
wired post-order, once all children of a node exist.

The same traversal fills the root's DocumentIndex:
- identifiers (last write wins on duplicates)
- category buckets (links with an href, images, scripts, forms)
- direct references to <html>, <head> and <body>
- the maximum depth observed

Sources may be live host nodes or previously built snapshots.  Snapshot
sources share their read-only attribute mapping with the new node and pass
their ``source_ref`` through, so every snapshot points at the live tree.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from dom_canvas.layout import partition
from dom_canvas.tree.nodes import (
    TAG_CATEGORIES,
    DocumentIndex,
    SnapshotNode,
    TagCategory,
)

__all__ = ["TreeBuilder"]

logger = logging.getLogger(__name__)


@dataclass
class TreeBuilder:
    """Builds immutable SnapshotNode trees from SourceNode-conformant roots.

    The builder assumes a valid root; callers validate with
    ``dom_canvas.protocols.is_document_like`` first.

    Interval policy:
        The root receives ``[start, end)``.  A node with ``n > 0`` children
        hands child ``i`` the ``i``-th of ``n`` equal sub-intervals.  A node
        with no children never divides (no zero-division), and a node with
        one child passes its whole interval down.

    Example::

        builder = TreeBuilder()
        root = builder.build(document, 0.0, 400.0)
        root.index.max_depth      # deepest depth in this snapshot
        root.index.ids["main"]    # SnapshotNode for id="main"
    """

    def build(self, source: Any, start: float, end: float) -> SnapshotNode:
        """Snapshot ``source`` and its subtree across ``[start, end)``.

        Args:
            source: Root of the tree to capture (live node or snapshot).
            start:  Left edge of the horizontal interval.
            end:    Right edge; must be finite and ``>= start``.

        Returns:
            The root SnapshotNode, whose ``index`` holds the DocumentIndex.

        Raises:
            ValueError: If ``start``/``end`` are not finite or ``end < start``.
        """
        if not (math.isfinite(start) and math.isfinite(end)):
            msg = f"interval bounds must be finite, got [{start}, {end})"
            raise ValueError(msg)
        if end < start:
            msg = f"interval end must be >= start, got [{start}, {end})"
            raise ValueError(msg)

        index = DocumentIndex()
        root = self._build_node(source, None, 0, float(start), float(end), index)
        root.index = index
        logger.debug(
            "Built snapshot of %s: max_depth=%d, ids=%d",
            root.tag_name,
            index.max_depth,
            len(index.ids),
        )
        return root

    def _build_node(
        self,
        source: Any,
        parent: SnapshotNode | None,
        depth: int,
        start: float,
        end: float,
        index: DocumentIndex,
    ) -> SnapshotNode:
        """Snapshot one source node, then recurse into its children."""
        if depth > index.max_depth:
            index.max_depth = depth

        if isinstance(source, SnapshotNode):
            # Snapshots are immutable: share the attribute mapping, keep the live ref.
            attributes = source.attributes
            source_ref = source.source_ref if source.source_ref is not None else source
        else:
            attributes = self._copy_attributes(getattr(source, "attributes", None))
            source_ref = source

        node = SnapshotNode(
            tag_name=source.tag_name,
            depth=depth,
            start=start,
            end=end,
            id=getattr(source, "id", None) or None,
            attributes=attributes,
            parent=parent,
            source_ref=source_ref,
        )

        if node.id is not None:
            index.ids[node.id] = node

        category = self._categorize(node)
        if category is not None:
            index.register(category, node)

        # Read the live child list once; its length fixes the partition.
        source_children = list(source.children)
        if not source_children:
            return node

        children = [
            self._build_node(child, node, depth + 1, child_start, child_end, index)
            for child, (child_start, child_end) in zip(
                source_children,
                partition(start, end, len(source_children)),
                strict=True,
            )
        ]
        node.children = tuple(children)
        node.first_element_child = children[0]
        node.last_element_child = children[-1]
        for position, child in enumerate(children):
            if position > 0:
                child.previous_element_sibling = children[position - 1]
            if position < len(children) - 1:
                child.next_element_sibling = children[position + 1]

        return node

    @staticmethod
    def _copy_attributes(attributes: Mapping[str, Any] | None) -> Mapping[str, str]:
        """Materialise a live attribute collection into a read-only copy."""
        if not attributes:
            return MappingProxyType({})
        return MappingProxyType({str(k): str(v) for k, v in attributes.items()})

    @staticmethod
    def _categorize(node: SnapshotNode) -> TagCategory | None:
        if node.tag_name is None:
            return None
        category = TAG_CATEGORIES.get(node.tag_name.upper())
        if category is TagCategory.LINK and "href" not in node.attributes:
            return None
        return category
