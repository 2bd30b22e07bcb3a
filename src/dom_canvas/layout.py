"""Layout primitives shared by the builder, the renderer and the hit-tester.

Horizontal space is divided proportionally: a parent's ``[start, end)``
interval is split into equal contiguous sub-intervals, one per child, in child
order.  Vertical placement is banded by depth: every node at depth ``d`` sits
on the row ``d * row_height + row_offset``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from dom_canvas.config import DEFAULT_CONFIG, RenderConfig

if TYPE_CHECKING:
    from dom_canvas.tree.nodes import SnapshotNode

__all__ = ["cell_height", "node_center", "partition"]


def partition(start: float, end: float, count: int) -> list[tuple[float, float]]:
    """Divide ``[start, end)`` into ``count`` equal contiguous intervals.

    Boundaries come from a single ``np.linspace`` call, so neighbouring
    intervals share the exact same float endpoint and the last interval ends
    exactly at ``end``.

    Args:
        start: Left edge of the interval to divide.
        end:   Right edge; must satisfy ``end >= start``.
        count: Number of sub-intervals.  ``0`` returns ``[]`` without dividing.

    Returns:
        ``count`` ``(start, end)`` pairs in order.
    """
    if count <= 0:
        return []
    bounds = np.linspace(start, end, num=count + 1, dtype=np.float64)
    bounds[0] = start
    bounds[-1] = end
    edges: list[float] = bounds.tolist()
    return list(zip(edges[:-1], edges[1:], strict=True))


def node_center(
    node: SnapshotNode,
    row_height: float,
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[float, float]:
    """Return the marker centre of ``node`` for a given row height."""
    x = node.start + (node.end - node.start) / 2
    y = node.depth * row_height + config.row_offset
    return x, y


def cell_height(surface_height: float, max_depth: int) -> float:
    """Row height that fits ``max_depth + 1`` rows on the surface."""
    return surface_height / (max_depth + 1)
