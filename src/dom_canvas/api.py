"""Public API functions for dom-canvas.

This module provides the user-facing one-shot functions: snapshot,
render_svg and render_html.  Each call creates fresh builders, renderers and
surfaces to guarantee zero global state between calls.  Interactive use goes
through ``InteractionController`` instead.
"""

from __future__ import annotations

from typing import Any

from dom_canvas.config import RenderConfig
from dom_canvas.document import parse_html
from dom_canvas.layout import cell_height
from dom_canvas.render.renderer import TreeRenderer
from dom_canvas.render.surfaces import SvgSurface
from dom_canvas.tree.builder import TreeBuilder
from dom_canvas.tree.nodes import DocumentIndex, SnapshotNode

__all__ = ["render_html", "render_svg", "snapshot"]


def snapshot(
    source: Any,
    start: float = 0.0,
    end: float = 400.0,
) -> tuple[SnapshotNode, DocumentIndex]:
    """Capture ``source`` as a layout-annotated snapshot.

    Args:
        source: Root of a ``SourceNode``-conformant tree (live or snapshot).
        start:  Left edge of the horizontal interval to partition.
        end:    Right edge.  Defaults to the 400-unit default surface width.

    Returns:
        ``(root, index)``: the snapshot root and its DocumentIndex.  The
        index is the same object as ``root.index``.
    """
    root = TreeBuilder().build(source, start, end)
    assert root.index is not None
    return root, root.index


def render_svg(
    source: Any,
    width: float = 400,
    height: float = 300,
    config: RenderConfig | None = None,
) -> str:
    """Render ``source`` headlessly and return an SVG document.

    Rows are sized so the deepest node fits: ``height / (max_depth + 1)``.

    Args:
        source: Root of the tree to draw.
        width:  Surface width.  Defaults to 400.
        height: Surface height.  Defaults to 300.
        config: Styling and geometry.  Defaults to ``RenderConfig()``.

    Returns:
        The SVG markup as a string.
    """
    root, index = snapshot(source, 0.0, float(width))
    surface = SvgSurface(width, height)
    renderer = TreeRenderer(config)
    renderer.draw_background(surface)
    renderer.draw_tree(surface, root, cell_height(height, index.max_depth))
    return surface.to_svg()


def render_html(
    html: str,
    width: float = 400,
    height: float = 300,
    config: RenderConfig | None = None,
) -> str:
    """Parse ``html`` and render its element tree as SVG."""
    return render_svg(parse_html(html), width=width, height=height, config=config)
