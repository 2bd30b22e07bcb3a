"""Capability protocols for dom-canvas extension points.

Defines the structural interfaces the core depends on. Host adapters plug in
without inheriting from any base class; any object with conformant members
passes ``isinstance`` checks.

- ``SourceNode``:     a read-only view of a live (or previously snapshotted) tree node.
- ``DrawingSurface``: a 2D immediate-mode canvas.
- ``EventTarget``:    a surface that can deliver pointer events.
- ``Scheduler``:      a single-threaded timer source (``asyncio`` loops conform).

Example::

    from dom_canvas.protocols import SourceNode

    class JsonNode:
        def __init__(self, tag, kids=()):
            self.tag_name = tag
            self.children = list(kids)
            self.id = None
            self.attributes = {}

    assert isinstance(JsonNode("DIV"), SourceNode)  # structural conformance
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "DrawingSurface",
    "EventTarget",
    "Scheduler",
    "SourceNode",
    "TimerHandle",
    "is_document_like",
]


@runtime_checkable
class SourceNode(Protocol):
    """Read-only capability set of a tree node the builder can traverse.

    Attributes:
        tag_name:   Category label (``"DIV"``, ``"IMG"``...). ``None`` is allowed
                    for unlabelled roots.
        children:   Ordered element children. Read in order, never mutated.
        id:         Optional identifier used as an index key.
        attributes: Attribute name -> string value.

    Optional members (read with ``getattr`` only, never required):
        style:      Mutable mapping used as the highlight side channel.
        source_ref: The originating live node, present on snapshots.
    """

    tag_name: str | None
    children: Sequence[Any]
    id: str | None
    attributes: Mapping[str, str]


@runtime_checkable
class DrawingSurface(Protocol):
    """2D immediate-mode drawing surface.

    ``fill_style`` and ``stroke_style`` are current-state colours, applied by
    the next ``fill()``/``fill_rect()``/``fill_text()`` and ``stroke()`` calls.
    """

    width: float
    height: float
    fill_style: str
    stroke_style: str

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def arc(
        self, x: float, y: float, radius: float, start_angle: float, end_angle: float
    ) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


@runtime_checkable
class EventTarget(Protocol):
    """A surface that delivers pointer events as ``handler(x, y)`` calls."""

    def add_event_listener(
        self, kind: str, handler: Callable[[float, float], Any]
    ) -> None: ...


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Single-threaded timer source.

    ``asyncio.AbstractEventLoop`` satisfies this protocol through
    ``loop.call_later``.
    """

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle: ...


def is_document_like(obj: object) -> bool:
    """Return True when ``obj`` exposes the ``SourceNode`` capability set."""
    return obj is not None and isinstance(obj, SourceNode)
