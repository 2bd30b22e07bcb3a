"""Live document model: a mutable element tree with change notifications.

This is the host side of the system: a small DOM-like tree that satisfies the
``SourceNode`` protocol, can be mutated, and notifies observers of child-list
changes anywhere in its subtree.  ``parse_html`` builds one from markup using
the standard library ``HTMLParser``; only element nodes are kept.
"""

from __future__ import annotations

from collections.abc import Callable
from html.parser import HTMLParser
from typing import Any

__all__ = ["Document", "Element", "parse_html"]

# Elements that never have children.
VOID_ELEMENTS = frozenset(
    {
        "AREA",
        "BASE",
        "BR",
        "COL",
        "EMBED",
        "HR",
        "IMG",
        "INPUT",
        "LINK",
        "META",
        "PARAM",
        "SOURCE",
        "TRACK",
        "WBR",
    }
)

MutationCallback = Callable[[], Any]


class Element:
    """A live element node.

    Attributes:
        tag_name:   Upper-case tag name.
        attributes: Live attribute mapping (name -> string value).
        style:      Mutable inline-style mapping (e.g. ``"background-color"``).
        children:   Live list of child elements.  Mutate through
                    ``append_child``/``insert_before``/``remove_child`` so that
                    observers are notified.
        parent:     Containing element, or None.
    """

    def __init__(
        self,
        tag_name: str,
        attributes: dict[str, str] | None = None,
    ) -> None:
        self.tag_name = tag_name.upper()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.style: dict[str, str] = {}
        self.children: list[Element] = []
        self.parent: Element | None = None

    def __repr__(self) -> str:
        suffix = f"#{self.id}" if self.id else ""
        return f"<{type(self).__name__} {self.tag_name}{suffix} children={len(self.children)}>"

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    @property
    def id(self) -> str | None:
        return self.attributes.get("id") or None

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        """Set an attribute; values are stored as strings.  Does not notify."""
        self.attributes[name] = str(value)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    @property
    def child_element_count(self) -> int:
        return len(self.children)

    @property
    def first_element_child(self) -> Element | None:
        return self.children[0] if self.children else None

    @property
    def last_element_child(self) -> Element | None:
        return self.children[-1] if self.children else None

    @property
    def previous_element_sibling(self) -> Element | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        position = siblings.index(self)
        return siblings[position - 1] if position > 0 else None

    @property
    def next_element_sibling(self) -> Element | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        position = siblings.index(self)
        return siblings[position + 1] if position + 1 < len(siblings) else None

    @property
    def owner_document(self) -> Document | None:
        node: Element | None = self
        while node is not None:
            if isinstance(node, Document):
                return node
            node = node.parent
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append_child(self, child: Element) -> Element:
        """Append ``child`` (detaching it from any previous parent)."""
        self._check_hierarchy(child)
        self._detach(child)
        child.parent = self
        self.children.append(child)
        self._notify()
        return child

    def insert_before(self, child: Element, reference: Element | None) -> Element:
        """Insert ``child`` before ``reference``; append when reference is None."""
        if reference is None:
            return self.append_child(child)
        if reference.parent is not self:
            msg = "reference node is not a child of this element"
            raise ValueError(msg)
        if child is reference:
            return child
        self._check_hierarchy(child)
        self._detach(child)
        child.parent = self
        self.children.insert(self.children.index(reference), child)
        self._notify()
        return child

    def remove_child(self, child: Element) -> Element:
        if child.parent is not self:
            msg = "node to remove is not a child of this element"
            raise ValueError(msg)
        self.children.remove(child)
        child.parent = None
        self._notify()
        return child

    def _check_hierarchy(self, child: Element) -> None:
        node: Element | None = self
        while node is not None:
            if node is child:
                msg = "cannot insert a node into itself or its own descendant"
                raise ValueError(msg)
            node = node.parent

    def _detach(self, child: Element) -> None:
        if child.parent is not None:
            child.parent.remove_child(child)

    def _notify(self) -> None:
        document = self.owner_document
        if document is not None:
            document._dispatch_mutation()


class Document(Element):
    """Root of a live tree; the place observers subscribe.

    Observers are called once per child-list mutation anywhere in the
    document's subtree.  Attribute and style changes do not notify.
    """

    def __init__(self) -> None:
        super().__init__("#document")
        self._observers: list[MutationCallback] = []

    @property
    def document_element(self) -> Element | None:
        return next((c for c in self.children if c.tag_name == "HTML"), None)

    @property
    def head(self) -> Element | None:
        return self._find_in_root("HEAD")

    @property
    def body(self) -> Element | None:
        return self._find_in_root("BODY")

    def get_element_by_id(self, element_id: str) -> Element | None:
        stack: list[Element] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if node.id == element_id:
                return node
            stack.extend(reversed(node.children))
        return None

    def observe(self, callback: MutationCallback) -> Callable[[], None]:
        """Subscribe ``callback`` to subtree child-list changes.

        Returns:
            A callable that removes the subscription (safe to call twice).
        """
        self._observers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return _unsubscribe

    def _dispatch_mutation(self) -> None:
        for callback in list(self._observers):
            callback()

    def _find_in_root(self, tag_name: str) -> Element | None:
        html = self.document_element
        if html is None:
            return None
        return next((c for c in html.children if c.tag_name == tag_name), None)


class _TreeParser(HTMLParser):
    """Builds an Element tree from start/end tag events."""

    def __init__(self, document: Document) -> None:
        super().__init__(convert_charrefs=True)
        self._open: list[Element] = [document]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        element = Element(tag, {name: value or "" for name, value in attrs})
        # Built directly (not via append_child): parsing is not a mutation.
        element.parent = self._open[-1]
        self._open[-1].children.append(element)
        if element.tag_name not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag.upper() not in VOID_ELEMENTS:
            self._open.pop()

    def handle_endtag(self, tag: str) -> None:
        tag_name = tag.upper()
        # Close up to the nearest matching open element; ignore strays.
        for depth in range(len(self._open) - 1, 0, -1):
            if self._open[depth].tag_name == tag_name:
                del self._open[depth:]
                return


def parse_html(text: str) -> Document:
    """Parse markup into a live Document of element nodes.

    Text and comments are dropped.  Void elements never take children, an end
    tag closes every element opened after its match, and end tags with no
    open match are ignored.
    """
    document = Document()
    parser = _TreeParser(document)
    parser.feed(text or "")
    parser.close()
    return document
