"""pytest plugin for dom-canvas.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import math
from typing import Any

import pytest

from dom_canvas.render.surfaces import RecordingSurface
from dom_canvas.tree.nodes import SnapshotNode


@pytest.fixture
def recording_surface() -> RecordingSurface:
    """A fresh 400x300 RecordingSurface per test."""
    return RecordingSurface(400, 300)


@pytest.fixture(scope="session")
def assert_valid_snapshot() -> Any:
    """Fixture that returns a callable snapshot invariant checker.

    Usage in tests::

        def test_my_adapter(assert_valid_snapshot):
            root = TreeBuilder().build(MyAdapter(tree), 0.0, 800.0)
            assert_valid_snapshot(root)

    Returns:
        A callable ``_assert(root, tolerance=1e-9) -> None`` that raises
        ``AssertionError`` when a partition, depth, sibling-link or max-depth
        invariant does not hold anywhere in the snapshot.
    """

    def _assert(root: SnapshotNode, tolerance: float = 1e-9) -> None:
        """Assert every structural invariant of a built snapshot.

        Raises:
            AssertionError: naming the offending node and the broken invariant.
        """
        deepest = 0
        for node in root.depth_first():
            deepest = max(deepest, node.depth)
            if node.end < node.start:
                raise AssertionError(f"negative width at {node!r}")
            children = node.children
            if not children:
                if node.first_element_child is not None or node.last_element_child is not None:
                    raise AssertionError(f"leaf with child links: {node!r}")
                continue
            if children[0].previous_element_sibling is not None:
                raise AssertionError(f"first child has a previous sibling: {children[0]!r}")
            if children[-1].next_element_sibling is not None:
                raise AssertionError(f"last child has a next sibling: {children[-1]!r}")
            if node.first_element_child is not children[0] or node.last_element_child is not children[-1]:
                raise AssertionError(f"first/last child links wrong at {node!r}")
            if not math.isclose(children[0].start, node.start, abs_tol=tolerance):
                raise AssertionError(f"children do not start at parent start: {node!r}")
            if not math.isclose(children[-1].end, node.end, abs_tol=tolerance):
                raise AssertionError(f"children do not end at parent end: {node!r}")
            for left, right in zip(children, children[1:]):
                if not math.isclose(left.end, right.start, abs_tol=tolerance):
                    raise AssertionError(f"gap or overlap between {left!r} and {right!r}")
                if left.next_element_sibling is not right or right.previous_element_sibling is not left:
                    raise AssertionError(f"sibling links inconsistent: {left!r} / {right!r}")
            for child in children:
                if child.depth != node.depth + 1:
                    raise AssertionError(f"depth of {child!r} is not parent depth + 1")
                if child.parent is not node:
                    raise AssertionError(f"parent link of {child!r} is wrong")
        if root.index is not None and root.index.max_depth != deepest:
            raise AssertionError(
                f"max_depth={root.index.max_depth} but deepest node is at {deepest}"
            )

    return _assert
