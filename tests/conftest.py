"""Shared test doubles and tree factories.

- FakeScheduler: deterministic ``call_later`` source with manual time
- build_document: nested-tuple shape -> live Document
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from dom_canvas.document import Document, Element

# ---------------------------------------------------------------------------
# Scheduler double
# ---------------------------------------------------------------------------


class FakeTimer:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records timers; ``advance()`` fires the ones that are due."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [t for t in self.live if t.when <= self.now]
        for timer in due:
            timer.cancelled = True
            timer.callback(*timer.args)


# ---------------------------------------------------------------------------
# Tree factory
# ---------------------------------------------------------------------------

# Tree node: (tag, attributes, [children]); attributes and children are optional.
TreeShape = tuple[Any, ...]


def build_element(shape: TreeShape) -> Element:
    tag = shape[0]
    attributes = shape[1] if len(shape) > 1 else {}
    children = shape[2] if len(shape) > 2 else []
    element = Element(tag, attributes)
    for child_shape in children:
        child = build_element(child_shape)
        child.parent = element
        element.children.append(child)
    return element


def build_document(*shapes: TreeShape) -> Document:
    """Build a Document whose top-level children follow ``shapes``."""
    document = Document()
    for shape in shapes:
        child = build_element(shape)
        child.parent = document
        document.children.append(child)
    return document


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def page() -> Document:
    """#document -> HTML -> [HEAD -> [SCRIPT], BODY -> [DIV#main -> [IMG, A href, A], FORM]]"""
    return build_document(
        (
            "html",
            {},
            [
                ("head", {}, [("script", {"src": "app.js"})]),
                (
                    "body",
                    {},
                    [
                        (
                            "div",
                            {"id": "main"},
                            [
                                ("img", {"src": "a.png"}),
                                ("a", {"href": "/x"}),
                                ("a", {"name": "anchor"}),
                            ],
                        ),
                        ("form", {"id": "login"}),
                    ],
                ),
            ],
        )
    )


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory fixture: ``make_document(("html", {}, [...]))``."""
    return build_document
