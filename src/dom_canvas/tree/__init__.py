"""Tree subpackage for snapshot primitives.

Re-exports the public API for the tree module:
- SnapshotNode: layout-annotated, immutable-after-build copy of a source node
- DocumentIndex: ids, category buckets and max depth, attached to the root
- TagCategory: StrEnum of the structural roles the index records
- TreeBuilder: converts a live (or snapshotted) tree into a SnapshotNode tree
"""

from dom_canvas.tree.builder import TreeBuilder
from dom_canvas.tree.nodes import DocumentIndex, SnapshotNode, TagCategory

__all__ = ["DocumentIndex", "SnapshotNode", "TagCategory", "TreeBuilder"]
