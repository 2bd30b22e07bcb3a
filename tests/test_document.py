"""Tests for the live document model and parse_html."""

from __future__ import annotations

import pytest

from dom_canvas.document import Document, Element, parse_html

# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------


class TestElement:
    def test_tag_is_upper_cased(self) -> None:
        assert Element("div").tag_name == "DIV"

    def test_id_comes_from_attributes(self) -> None:
        assert Element("p", {"id": "x"}).id == "x"
        assert Element("p", {"id": ""}).id is None
        assert Element("p").id is None

    def test_set_attribute_stringifies(self) -> None:
        element = Element("td")
        element.set_attribute("colspan", 2)
        assert element.get_attribute("colspan") == "2"

    def test_sibling_navigation(self) -> None:
        parent = Element("ul")
        a, b, c = (parent.append_child(Element("li")) for _ in range(3))
        assert parent.first_element_child is a
        assert parent.last_element_child is c
        assert b.previous_element_sibling is a
        assert b.next_element_sibling is c
        assert a.previous_element_sibling is None
        assert c.next_element_sibling is None
        assert parent.child_element_count == 3

    def test_append_moves_node(self) -> None:
        first, second = Element("div"), Element("div")
        child = first.append_child(Element("span"))
        second.append_child(child)
        assert first.children == []
        assert child.parent is second

    def test_insert_before(self) -> None:
        parent = Element("ul")
        last = parent.append_child(Element("li", {"id": "last"}))
        first = parent.insert_before(Element("li", {"id": "first"}), last)
        assert parent.children == [first, last]

    def test_insert_before_none_appends(self) -> None:
        parent = Element("ul")
        child = parent.insert_before(Element("li"), None)
        assert parent.children == [child]

    def test_insert_before_foreign_reference(self) -> None:
        with pytest.raises(ValueError, match="reference"):
            Element("ul").insert_before(Element("li"), Element("li"))

    def test_append_self_rejected(self) -> None:
        element = Element("div")
        with pytest.raises(ValueError, match="descendant"):
            element.append_child(element)
        assert element.children == []
        assert element.parent is None

    def test_append_ancestor_rejected(self) -> None:
        html = Element("html")
        body = html.append_child(Element("body"))
        div = body.append_child(Element("div"))
        with pytest.raises(ValueError, match="descendant"):
            div.append_child(html)
        with pytest.raises(ValueError, match="descendant"):
            div.insert_before(body, None)
        assert html.parent is None
        assert html.children == [body]
        assert body.children == [div]
        assert div.children == []

    def test_insert_before_itself_is_noop(self) -> None:
        parent = Element("ul")
        a, b, c = (parent.append_child(Element("li")) for _ in range(3))
        assert parent.insert_before(b, b) is b
        assert parent.children == [a, b, c]
        assert b.parent is parent

    def test_remove_foreign_child(self) -> None:
        with pytest.raises(ValueError, match="not a child"):
            Element("ul").remove_child(Element("li"))

    def test_owner_document(self) -> None:
        document = Document()
        html = document.append_child(Element("html"))
        body = html.append_child(Element("body"))
        assert body.owner_document is document
        assert Element("p").owner_document is None


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class TestDocument:
    def test_structural_accessors(self, page: Document) -> None:
        assert page.document_element is not None
        assert page.document_element.tag_name == "HTML"
        assert page.head is not None and page.head.tag_name == "HEAD"
        assert page.body is not None and page.body.tag_name == "BODY"

    def test_empty_document(self) -> None:
        document = Document()
        assert document.document_element is None
        assert document.body is None

    def test_get_element_by_id(self, page: Document) -> None:
        main = page.get_element_by_id("main")
        assert main is not None and main.tag_name == "DIV"
        assert page.get_element_by_id("missing") is None

    def test_observers_see_subtree_changes(self, page: Document) -> None:
        calls: list[str] = []
        page.observe(lambda: calls.append("changed"))
        main = page.get_element_by_id("main")
        assert main is not None
        main.append_child(Element("p"))
        main.remove_child(main.children[0])
        assert calls == ["changed", "changed"]

    def test_attribute_and_style_changes_do_not_notify(self, page: Document) -> None:
        calls: list[str] = []
        page.observe(lambda: calls.append("changed"))
        main = page.get_element_by_id("main")
        assert main is not None
        main.set_attribute("class", "x")
        main.style["background-color"] = "red"
        assert calls == []

    def test_unsubscribe(self, page: Document) -> None:
        calls: list[str] = []
        unsubscribe = page.observe(lambda: calls.append("changed"))
        unsubscribe()
        unsubscribe()
        assert page.body is not None
        page.body.append_child(Element("p"))
        assert calls == []

    def test_rejected_insert_does_not_notify(self, page: Document) -> None:
        calls: list[str] = []
        page.observe(lambda: calls.append("changed"))
        main = page.get_element_by_id("main")
        assert main is not None and page.body is not None
        with pytest.raises(ValueError):
            main.append_child(page.body)
        first = main.children[0]
        main.insert_before(first, first)
        assert calls == []
        assert main.parent is page.body

    def test_detached_subtree_does_not_notify(self, page: Document) -> None:
        calls: list[str] = []
        page.observe(lambda: calls.append("changed"))
        loose = Element("div")
        loose.append_child(Element("p"))
        assert calls == []


# ---------------------------------------------------------------------------
# parse_html
# ---------------------------------------------------------------------------


class TestParseHtml:
    def test_basic_document(self) -> None:
        document = parse_html(
            "<html><head><title>t</title></head><body><div id='a'><p>hi</p></div></body></html>"
        )
        assert document.head is not None
        assert [c.tag_name for c in document.head.children] == ["TITLE"]
        main = document.get_element_by_id("a")
        assert main is not None
        assert [c.tag_name for c in main.children] == ["P"]

    def test_text_and_comments_dropped(self) -> None:
        document = parse_html("<div>text<!-- note --><span></span></div>")
        (div,) = document.children
        assert [c.tag_name for c in div.children] == ["SPAN"]

    def test_void_elements_take_no_children(self) -> None:
        document = parse_html("<div><img src='a.png'><br><span></span></div>")
        (div,) = document.children
        assert [c.tag_name for c in div.children] == ["IMG", "BR", "SPAN"]

    def test_self_closing_tag(self) -> None:
        document = parse_html("<div><widget/><span></span></div>")
        (div,) = document.children
        assert [c.tag_name for c in div.children] == ["WIDGET", "SPAN"]

    def test_end_tag_closes_unclosed_children(self) -> None:
        document = parse_html("<ul><li>a<li>b</ul><p></p>")
        assert [c.tag_name for c in document.children] == ["UL", "P"]

    def test_stray_end_tag_ignored(self) -> None:
        document = parse_html("<div></span><p></p></div>")
        (div,) = document.children
        assert [c.tag_name for c in div.children] == ["P"]

    def test_attributes_kept(self) -> None:
        document = parse_html('<a href="/x" download>go</a>')
        (anchor,) = document.children
        assert anchor.attributes == {"href": "/x", "download": ""}

    def test_empty_input(self) -> None:
        assert parse_html("").children == []
