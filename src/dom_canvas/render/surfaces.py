"""Concrete DrawingSurface implementations.

- RecordingSurface: keeps every primitive call, for headless use and tests.
  It also satisfies ``EventTarget`` so controllers can register handlers.
- SvgSurface: translates primitives into a standalone SVG document.

Both satisfy ``dom_canvas.protocols.DrawingSurface`` structurally.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape, quoteattr

__all__ = ["DrawCall", "RecordingSurface", "SvgSurface"]


@dataclass(frozen=True, slots=True)
class DrawCall:
    """One recorded primitive with the colour state at the time of the call."""

    op: str
    args: tuple[Any, ...]
    fill_style: str
    stroke_style: str


class RecordingSurface:
    """In-memory surface that records primitives instead of drawing them.

    Args:
        width:  Surface width in user units.
        height: Surface height in user units.

    Example::

        surface = RecordingSurface(400, 300)
        render(surface, root, row_height=100.0)
        surface.calls_named("arc")   # one DrawCall per node marker
    """

    def __init__(self, width: float = 400, height: float = 300) -> None:
        self.width = width
        self.height = height
        self.fill_style = "#000"
        self.stroke_style = "#000"
        self.calls: list[DrawCall] = []
        self._listeners: dict[str, list[Callable[[float, float], Any]]] = {}

    def __repr__(self) -> str:
        return f"RecordingSurface(width={self.width}, height={self.height}, calls={len(self.calls)})"

    # ------------------------------------------------------------------
    # DrawingSurface Protocol surface
    # ------------------------------------------------------------------

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def stroke(self) -> None:
        self._record("stroke")

    def fill(self) -> None:
        self._record("fill")

    def arc(
        self, x: float, y: float, radius: float, start_angle: float, end_angle: float
    ) -> None:
        self._record("arc", x, y, radius, start_angle, end_angle)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("fill_rect", x, y, width, height)

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("clear_rect", x, y, width, height)

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._record("fill_text", text, x, y)

    # ------------------------------------------------------------------
    # EventTarget Protocol surface
    # ------------------------------------------------------------------

    def add_event_listener(
        self, kind: str, handler: Callable[[float, float], Any]
    ) -> None:
        handlers = self._listeners.setdefault(kind, [])
        if handler not in handlers:
            handlers.append(handler)

    def listeners(self, kind: str) -> list[Callable[[float, float], Any]]:
        return list(self._listeners.get(kind, ()))

    def dispatch(self, kind: str, x: float, y: float) -> None:
        """Deliver a pointer event to every handler registered for ``kind``."""
        for handler in list(self._listeners.get(kind, ())):
            handler(x, y)

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------

    def ops(self) -> list[str]:
        return [call.op for call in self.calls]

    def calls_named(self, op: str) -> list[DrawCall]:
        return [call for call in self.calls if call.op == op]

    def texts(self) -> list[str]:
        return [call.args[0] for call in self.calls if call.op == "fill_text"]

    def clear(self) -> None:
        """Forget recorded calls (listeners are kept)."""
        self.calls.clear()

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append(DrawCall(op, args, self.fill_style, self.stroke_style))


class SvgSurface:
    """DrawingSurface that accumulates SVG elements.

    Paths are collected between ``begin_path()`` and ``stroke()``/``fill()``:
    a stroked path becomes ``<line>`` elements, a filled path becomes a
    ``<polygon>``, and a filled arc becomes a ``<circle>``.  Clearing the full
    surface discards everything drawn so far; partial clears are not
    representable in SVG and are ignored.
    """

    def __init__(self, width: float = 400, height: float = 300) -> None:
        self.width = width
        self.height = height
        self.fill_style = "#000"
        self.stroke_style = "#000"
        self._elements: list[str] = []
        self._points: list[tuple[float, float]] = []
        self._segments: list[tuple[tuple[float, float], tuple[float, float]]] = []
        self._arcs: list[tuple[float, float, float]] = []

    def __repr__(self) -> str:
        return f"SvgSurface(width={self.width}, height={self.height}, elements={len(self._elements)})"

    @property
    def elements(self) -> list[str]:
        return list(self._elements)

    # ------------------------------------------------------------------
    # DrawingSurface Protocol surface
    # ------------------------------------------------------------------

    def begin_path(self) -> None:
        self._points = []
        self._segments = []
        self._arcs = []

    def move_to(self, x: float, y: float) -> None:
        self._points.append((x, y))

    def line_to(self, x: float, y: float) -> None:
        if self._points:
            self._segments.append((self._points[-1], (x, y)))
        self._points.append((x, y))

    def stroke(self) -> None:
        color = quoteattr(self.stroke_style)
        for (x1, y1), (x2, y2) in self._segments:
            self._elements.append(
                f"<line x1={_num(x1)} y1={_num(y1)} x2={_num(x2)} y2={_num(y2)} "
                f"stroke={color} />"
            )

    def fill(self) -> None:
        color = quoteattr(self.fill_style)
        for x, y, radius in self._arcs:
            self._elements.append(
                f"<circle cx={_num(x)} cy={_num(y)} r={_num(radius)} fill={color} />"
            )
        if len(self._points) >= 3:
            points = " ".join(f"{x:g},{y:g}" for x, y in self._points)
            self._elements.append(f'<polygon points="{points}" fill={color} />')

    def arc(
        self, x: float, y: float, radius: float, start_angle: float, end_angle: float
    ) -> None:
        self._arcs.append((x, y, radius))

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._elements.append(
            f"<rect x={_num(x)} y={_num(y)} width={_num(width)} height={_num(height)} "
            f"fill={quoteattr(self.fill_style)} />"
        )

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        if x <= 0 and y <= 0 and width >= self.width and height >= self.height:
            self._elements.clear()

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._elements.append(
            f"<text x={_num(x)} y={_num(y)} fill={quoteattr(self.fill_style)}>"
            f"{escape(text)}</text>"
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_svg(self) -> str:
        """Return the drawing as a standalone SVG document."""
        body = "\n  ".join(self._elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width:g}" '
            f'height="{self.height:g}" viewBox="0 0 {self.width:g} {self.height:g}">\n'
            f"  {body}\n"
            "</svg>\n"
        )

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        target.write_text(self.to_svg(), encoding="utf-8")
        return target


def _num(value: float) -> str:
    return f'"{value:g}"'
