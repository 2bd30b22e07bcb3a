"""Tests for the layout primitives: partition, node_center, cell_height."""

from __future__ import annotations

import math

import pytest

from dom_canvas.config import RenderConfig
from dom_canvas.layout import cell_height, node_center, partition
from dom_canvas.tree.nodes import SnapshotNode

# ---------------------------------------------------------------------------
# partition
# ---------------------------------------------------------------------------


class TestPartition:
    def test_zero_count_is_empty(self) -> None:
        assert partition(0.0, 100.0, 0) == []

    def test_negative_count_is_empty(self) -> None:
        assert partition(0.0, 100.0, -3) == []

    def test_single_interval_is_whole(self) -> None:
        assert partition(5.0, 15.0, 1) == [(5.0, 15.0)]

    def test_even_split(self) -> None:
        assert partition(0.0, 400.0, 2) == [(0.0, 200.0), (200.0, 400.0)]

    def test_returns_plain_floats(self) -> None:
        for left, right in partition(0.0, 1.0, 3):
            assert type(left) is float
            assert type(right) is float

    @pytest.mark.parametrize("count", [3, 6, 7, 13])
    def test_endpoints_are_exact(self, count: int) -> None:
        pieces = partition(0.1, 0.7, count)
        assert pieces[0][0] == 0.1
        assert pieces[-1][1] == 0.7

    @pytest.mark.parametrize("count", [3, 6, 7, 13])
    def test_neighbours_share_boundaries(self, count: int) -> None:
        pieces = partition(0.0, 1.0, count)
        for (_, left_end), (right_start, _) in zip(pieces, pieces[1:]):
            assert left_end == right_start

    def test_widths_are_equal(self) -> None:
        widths = [end - start for start, end in partition(0.0, 100.0, 7)]
        assert all(math.isclose(w, 100.0 / 7) for w in widths)


# ---------------------------------------------------------------------------
# node_center / cell_height
# ---------------------------------------------------------------------------


class TestNodeCenter:
    def test_root_row_uses_offset(self) -> None:
        node = SnapshotNode(tag_name="HTML", depth=0, start=0.0, end=400.0)
        assert node_center(node, 75.0) == (200.0, 20.0)

    def test_depth_bands(self) -> None:
        node = SnapshotNode(tag_name="LI", depth=3, start=100.0, end=200.0)
        assert node_center(node, 50.0) == (150.0, 170.0)

    def test_custom_row_offset(self) -> None:
        node = SnapshotNode(tag_name="LI", depth=1, start=0.0, end=10.0)
        assert node_center(node, 10.0, RenderConfig(row_offset=0.0)) == (5.0, 10.0)


class TestCellHeight:
    def test_single_row(self) -> None:
        assert cell_height(300, 0) == 300.0

    def test_depth_four(self) -> None:
        assert cell_height(300, 4) == 60.0
