"""SnapshotNode, DocumentIndex and TagCategory for layout-annotated snapshots.

Provides the data types produced by TreeBuilder: an immutable-after-build
copy of a live tree, annotated with horizontal intervals and depth, plus the
document-level index that only the root carries.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any

_EMPTY_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})


class TagCategory(StrEnum):
    """Structural roles recorded in the DocumentIndex.

    StrEnum values are the lowercased member names:
    - DOCUMENT_ELEMENT -> "document_element" : the <html> element
    - HEAD             -> "head"
    - BODY             -> "body"
    - LINK             -> "link"   : <a>/<area> carrying an href
    - IMAGE            -> "image"
    - SCRIPT           -> "script"
    - FORM             -> "form"
    """

    DOCUMENT_ELEMENT = auto()
    HEAD = auto()
    BODY = auto()
    LINK = auto()
    IMAGE = auto()
    SCRIPT = auto()
    FORM = auto()


# Upper-case tag name -> category.  LINK tags only count when an href is present.
TAG_CATEGORIES: Mapping[str, TagCategory] = MappingProxyType(
    {
        "HTML": TagCategory.DOCUMENT_ELEMENT,
        "HEAD": TagCategory.HEAD,
        "BODY": TagCategory.BODY,
        "A": TagCategory.LINK,
        "AREA": TagCategory.LINK,
        "IMG": TagCategory.IMAGE,
        "SCRIPT": TagCategory.SCRIPT,
        "FORM": TagCategory.FORM,
    }
)


@dataclass(eq=False, slots=True)
class SnapshotNode:
    """One element of a captured tree, annotated for layout.

    Equality is identity: two snapshots of the same source are distinct nodes.

    Attributes:
        tag_name:   Category label copied from the source at build time.
        depth:      0 for the root; parent depth + 1 otherwise.
        start:      Left edge of the node's horizontal interval.
        end:        Right edge (exclusive) of the interval.
        id:         Copied identifier, or None.
        attributes: Read-only attribute mapping (shared with the source when
                    the source is itself a snapshot).
        parent:     Containing node; None for the root.
        source_ref: The originating live node.  Snapshots of snapshots point
                    through to the same live node.
        children:   Child snapshots in source order.
        first_element_child / last_element_child:
                    Ends of ``children``; None for leaves.
        previous_element_sibling / next_element_sibling:
                    Neighbours within the parent's ``children``.
        index:      DocumentIndex, present on the root only.
    """

    tag_name: str | None
    depth: int
    start: float
    end: float
    id: str | None = None
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY_ATTRIBUTES)
    parent: SnapshotNode | None = field(default=None, repr=False)
    source_ref: Any = field(default=None, repr=False)
    children: tuple[SnapshotNode, ...] = field(default=(), repr=False)
    first_element_child: SnapshotNode | None = field(default=None, repr=False)
    last_element_child: SnapshotNode | None = field(default=None, repr=False)
    previous_element_sibling: SnapshotNode | None = field(default=None, repr=False)
    next_element_sibling: SnapshotNode | None = field(default=None, repr=False)
    index: DocumentIndex | None = field(default=None, repr=False)

    @property
    def child_element_count(self) -> int:
        return len(self.children)

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def center_x(self) -> float:
        """Horizontal centre of the node's interval (its marker x)."""
        return self.start + (self.end - self.start) / 2

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def depth_first(self) -> Iterator[SnapshotNode]:
        """Traverse the subtree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()


@dataclass(slots=True)
class DocumentIndex:
    """Aggregates collected in the same traversal that builds a snapshot.

    Attributes:
        ids:              identifier -> node.  Duplicate ids: last visited wins.
        links:            <a>/<area> nodes carrying an href, in visit order.
        images:           <img> nodes in visit order.
        scripts:          <script> nodes in visit order.
        forms:            <form> nodes in visit order.
        document_element: The <html> node, if encountered.
        head:             The <head> node, if encountered.
        body:             The <body> node, if encountered.
        max_depth:        Deepest ``depth`` present in the snapshot.
    """

    ids: dict[str, SnapshotNode] = field(default_factory=dict)
    links: list[SnapshotNode] = field(default_factory=list)
    images: list[SnapshotNode] = field(default_factory=list)
    scripts: list[SnapshotNode] = field(default_factory=list)
    forms: list[SnapshotNode] = field(default_factory=list)
    document_element: SnapshotNode | None = None
    head: SnapshotNode | None = None
    body: SnapshotNode | None = None
    max_depth: int = 0

    def register(self, category: TagCategory, node: SnapshotNode) -> None:
        """Record ``node`` under ``category``."""
        if category is TagCategory.DOCUMENT_ELEMENT:
            self.document_element = node
        elif category is TagCategory.HEAD:
            self.head = node
        elif category is TagCategory.BODY:
            self.body = node
        elif category is TagCategory.LINK:
            self.links.append(node)
        elif category is TagCategory.IMAGE:
            self.images.append(node)
        elif category is TagCategory.SCRIPT:
            self.scripts.append(node)
        elif category is TagCategory.FORM:
            self.forms.append(node)
