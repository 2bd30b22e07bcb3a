"""TreeRenderer: draws a snapshot tree onto a DrawingSurface.

Draw order per node:
1. sibling-span connector between the first and last child (when distinct)
2. for each child: connector parent -> child, then the child's subtree
3. the node's own marker, then its label for always-labelled tags

Markers are drawn after every connector below them, so connectors never
cover a marker.  The renderer only reads the snapshot; the only side effects
are surface calls.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from dom_canvas.config import DEFAULT_CONFIG, RenderConfig
from dom_canvas.layout import node_center

if TYPE_CHECKING:
    from dom_canvas.protocols import DrawingSurface
    from dom_canvas.tree.nodes import SnapshotNode

__all__ = ["TreeRenderer", "render"]

_FULL_CIRCLE = 2 * math.pi

# Left-pointing triangle inside the back-affordance corner.
_BACK_ARROW: tuple[tuple[float, float], ...] = ((10.0, 10.0), (20.0, 5.0), (20.0, 15.0))


class TreeRenderer:
    """Issues drawing primitives for snapshot trees.

    Example::

        renderer = TreeRenderer()
        renderer.draw_background(surface)
        renderer.draw_tree(surface, root, row_height=60.0)
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config if config is not None else DEFAULT_CONFIG

    @property
    def config(self) -> RenderConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def draw_background(self, surface: DrawingSurface) -> None:
        """Clear the whole surface and paint the background."""
        surface.clear_rect(0, 0, surface.width, surface.height)
        surface.fill_style = self._config.background_color
        surface.fill_rect(0, 0, surface.width, surface.height)
        surface.stroke_style = self._config.connector_color

    def draw_tree(
        self, surface: DrawingSurface, root: SnapshotNode, row_height: float
    ) -> None:
        """Draw ``root`` and its subtree, children first, markers on top."""
        self._draw_node(surface, root, row_height)

    def draw_back_arrow(self, surface: DrawingSurface) -> None:
        """Draw the back-navigation glyph in the top-left corner."""
        (x0, y0), *rest = _BACK_ARROW
        surface.fill_style = self._config.text_color
        surface.begin_path()
        surface.move_to(x0, y0)
        for x, y in rest:
            surface.line_to(x, y)
        surface.fill()

    def draw_node_label(
        self, surface: DrawingSurface, node: SnapshotNode, row_height: float
    ) -> None:
        """Caption ``node`` as ``TAG#id`` (``#id`` only when it has one)."""
        if not node.tag_name:
            return
        text = node.tag_name + (f"#{node.id}" if node.id else "")
        x, y = node_center(node, row_height, self._config)
        self._draw_text(surface, text, x, y)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _draw_node(
        self, surface: DrawingSurface, node: SnapshotNode, row_height: float
    ) -> None:
        cfg = self._config
        x, y = node_center(node, row_height, cfg)

        first = node.first_element_child
        last = node.last_element_child
        if first is not None and last is not None and first is not last:
            self._draw_line(
                surface,
                node_center(first, row_height, cfg),
                node_center(last, row_height, cfg),
            )

        for child in node.children:
            self._draw_line(surface, (x, y), node_center(child, row_height, cfg))
            self._draw_node(surface, child, row_height)

        surface.begin_path()
        surface.fill_style = cfg.color_for(node.tag_name)
        surface.arc(x, y, cfg.node_radius, 0.0, _FULL_CIRCLE)
        surface.fill()

        if cfg.is_labelled(node.tag_name):
            self._draw_text(surface, str(node.tag_name), x, y)

    def _draw_text(self, surface: DrawingSurface, text: str, x: float, y: float) -> None:
        offset = self._config.label_offset
        surface.fill_style = self._config.text_color
        surface.fill_text(text, x + offset, y - offset)

    @staticmethod
    def _draw_line(
        surface: DrawingSurface,
        origin: tuple[float, float],
        target: tuple[float, float],
    ) -> None:
        surface.begin_path()
        surface.move_to(*origin)
        surface.line_to(*target)
        surface.stroke()


def render(
    surface: DrawingSurface,
    root: SnapshotNode,
    row_height: float,
    config: RenderConfig | None = None,
) -> None:
    """Draw ``root`` onto ``surface`` with a fresh TreeRenderer."""
    TreeRenderer(config).draw_tree(surface, root, row_height)
