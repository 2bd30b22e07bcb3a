"""InteractionController: one rendering session over one drawing surface.

Owns the state of an interactive view:
- the current snapshot and the cell height it was painted with
- the navigation stack of previously displayed snapshots (most recent last)
- the hover debouncer and the single highlight slot on the live tree

State machine: Idle -> ViewingSnapshot(current, stack) on ``load()``.
Clicks drill down (push) or, inside the top-left back region with a
non-empty stack, drill up (pop).  ``on_structural_change()`` rebuilds every
retained snapshot from its live source, because interval widths depend on
live child counts anywhere in the subtree.

Everything runs synchronously inside the triggering callback; the only
deferred work is the debounced hover.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from dom_canvas.config import DEFAULT_CONFIG, RenderConfig
from dom_canvas.debounce import Debouncer
from dom_canvas.highlight import HighlightSlot
from dom_canvas.hit_test import locate
from dom_canvas.layout import cell_height as compute_cell_height
from dom_canvas.protocols import EventTarget, is_document_like
from dom_canvas.render.renderer import TreeRenderer
from dom_canvas.tree.builder import TreeBuilder

if TYPE_CHECKING:
    from dom_canvas.protocols import DrawingSurface, Scheduler
    from dom_canvas.tree.nodes import SnapshotNode

__all__ = ["InteractionController"]

logger = logging.getLogger(__name__)


class InteractionController:
    """Interactive snapshot view bound to a single surface.

    Two controllers never share state; construct one per view and call
    ``close()`` when the view goes away.

    Example::

        surface = RecordingSurface(400, 300)
        view = InteractionController(surface, scheduler=loop)
        view.load(document)
        view.handle_click(200, 20)      # drill into the node at (200, 20)
        view.handle_click(5, 5)         # back
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: RenderConfig | None = None,
        scheduler: Scheduler | None = None,
        builder: TreeBuilder | None = None,
    ) -> None:
        """Initialise an idle controller.

        Args:
            surface:   Drawing surface; also receives event listeners when it
                satisfies ``EventTarget``.
            config:    Geometry and styling.  Defaults to ``DEFAULT_CONFIG``.
            scheduler: Timer source for the hover debounce.  Defaults to the
                running asyncio loop.
            builder:   Snapshot builder.  Defaults to ``TreeBuilder()``.
        """
        self._surface = surface
        self._config = config if config is not None else DEFAULT_CONFIG
        self._builder = builder if builder is not None else TreeBuilder()
        self._renderer = TreeRenderer(self._config)
        self._hover = Debouncer(self._config.hover_delay, scheduler)
        self._highlight = HighlightSlot(self._config.highlight_color)
        self._current: SnapshotNode | None = None
        self._stack: list[SnapshotNode] = []
        self._cell_height = 0.0
        self._listening = False

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def current_tree(self) -> SnapshotNode | None:
        return self._current

    @property
    def navigation_stack(self) -> tuple[SnapshotNode, ...]:
        return tuple(self._stack)

    @property
    def cell_height(self) -> float:
        return self._cell_height

    @property
    def highlighted(self) -> Any:
        """The live node currently holding the hover highlight, or None."""
        return self._highlight.current

    # ------------------------------------------------------------------
    # Render entry points
    # ------------------------------------------------------------------

    def load(self, root: Any) -> bool:
        """Show a new document: reset navigation, snapshot, paint.

        Returns:
            False (and leaves the current view untouched) when ``root`` is not
            document-like; True otherwise.
        """
        if not is_document_like(root):
            logger.debug("Ignoring non-document root %r", type(root).__name__)
            return False
        self._stack.clear()
        self._hover.cancel()
        self._current = self._snapshot(root)
        logger.info(
            "Loaded %s (max_depth=%d)",
            self._current.tag_name,
            self._max_depth(self._current),
        )
        self._paint()
        self._listen()
        return True

    def draw_dom(self, root: Any) -> bool:
        """Snapshot ``root`` and paint it as the current tree.

        The navigation stack is left as is.  Returns False without changing
        anything when ``root`` is not document-like.
        """
        if not is_document_like(root):
            logger.debug("Ignoring non-document root %r", type(root).__name__)
            return False
        self._current = self._snapshot(root)
        self._paint()
        self._listen()
        return True

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_click(self, x: float, y: float) -> SnapshotNode | None:
        """Drill up from the back region, or drill into the clicked node.

        Returns:
            The new current tree, or None when the click changed nothing.
        """
        if self._current is None:
            return None

        region = self._config.back_region
        if x < region and y < region and self._stack:
            self._current = self._stack.pop()
            logger.debug("Drill up (stack depth %d)", len(self._stack))
        else:
            found = locate(self._current, x, y, self._cell_height, self._config)
            if found is None:
                logger.debug("Click at (%s, %s) hit nothing", x, y)
                return None
            self._stack.append(self._current)
            self._current = self._snapshot(found.source_ref)
            logger.debug(
                "Drill down into %s (stack depth %d)", found.tag_name, len(self._stack)
            )

        self._paint()
        return self._current

    def handle_mouse_move(self, x: float, y: float) -> None:
        """Debounced pointer-move: only the last move of a burst is handled."""
        if self._current is None:
            return
        self._hover.call(self.hover, x, y)

    def hover(self, x: float, y: float) -> SnapshotNode | None:
        """Caption the node under ``(x, y)`` and highlight its live source.

        Returns:
            The hovered snapshot node, or None on a miss (nothing changes).
        """
        if self._current is None:
            return None
        found = locate(self._current, x, y, self._cell_height, self._config)
        if found is None:
            return None

        self._paint()
        self._renderer.draw_node_label(self._surface, found, self._cell_height)
        self._highlight.apply(found.source_ref)
        return found

    def on_structural_change(self) -> None:
        """Rebuild the whole navigation stack and the current tree, then repaint."""
        if self._current is None:
            return
        self._stack = [self._snapshot(tree.source_ref) for tree in self._stack]
        self._current = self._snapshot(self._current.source_ref)
        logger.info("Rebuilt after mutation (stack depth %d)", len(self._stack))
        self._paint()

    def close(self) -> None:
        """Tear the view down: cancel hover, restore highlight, drop snapshots."""
        self._hover.cancel()
        self._highlight.release()
        self._stack.clear()
        self._current = None
        self._cell_height = 0.0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _snapshot(self, source: Any) -> SnapshotNode:
        return self._builder.build(source, 0.0, float(self._surface.width))

    def _paint(self) -> None:
        assert self._current is not None
        self._cell_height = compute_cell_height(
            self._surface.height, self._max_depth(self._current)
        )
        self._renderer.draw_background(self._surface)
        self._renderer.draw_tree(self._surface, self._current, self._cell_height)
        if self._stack:
            self._renderer.draw_back_arrow(self._surface)

    def _listen(self) -> None:
        if self._listening or not isinstance(self._surface, EventTarget):
            return
        self._surface.add_event_listener("click", self.handle_click)
        self._surface.add_event_listener("mousemove", self.handle_mouse_move)
        self._listening = True

    @staticmethod
    def _max_depth(tree: SnapshotNode) -> int:
        return tree.index.max_depth if tree.index is not None else 0
