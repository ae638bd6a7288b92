"""
Tests for the layout module.

Tests coordinates, separation rules and idempotence.
"""

import pytest
from patternviz.graph import build_from_source
from patternviz.layout import LayoutConfig, bounds, layout
from tests.fixtures import EMPTY, MIXED_PROGRAM, NESTED_CONSTRUCTS, deep_chain


class TestLayout:
    """Tests for the tree layout."""

    def test_every_node_placed(self):
        """Test that the layout covers every node."""
        result = build_from_source(MIXED_PROGRAM)

        positions = layout(result)
        assert set(positions) == set(result.nodes)

    def test_idempotent(self):
        """Test that two calls give identical coordinates."""
        result = build_from_source(MIXED_PROGRAM)

        assert layout(result) == layout(result)

    def test_root_only(self):
        """Test a tree of depth 0."""
        result = build_from_source(EMPTY)

        positions = layout(result)
        root = positions[result.root_id]
        assert (root.x, root.y, root.depth) == (0.0, 0.0, 0)

    def test_depth_drives_y(self):
        """Test that y grows with depth in vertical orientation."""
        result = build_from_source(NESTED_CONSTRUCTS)
        config = LayoutConfig(level_spacing=50.0)

        positions = layout(result, config)
        for node, depth in result.walk():
            assert positions[node.id].depth == depth
            assert positions[node.id].y == depth * 50.0

    def test_chain_is_straight(self):
        """Test that a skewed chain stays on one vertical line."""
        result = build_from_source(deep_chain(300))

        positions = layout(result)
        xs = {p.x for p in positions.values()}
        assert xs == {0.0}
        assert max(p.y for p in positions.values()) == 300 * 100.0

    def test_siblings_separated(self):
        """Test that leaves of one parent are one slot apart."""
        result = build_from_source("let a; let b; let c;")
        config = LayoutConfig(node_spacing=10.0)

        positions = layout(result, config)
        xs = [positions[child].x for child in result.root.children]
        assert xs == [0.0, 10.0, 20.0]
        assert positions[result.root_id].x == 10.0

    def test_cousins_separated_more(self):
        """Test the wider gap between leaves of different parents."""
        source = "function a() { let x; } function b() { let y; }"
        result = build_from_source(source)
        config = LayoutConfig(node_spacing=10.0)

        positions = layout(result, config)
        first, second = result.root.children
        x_leaf = result.nodes[first].children[0]
        y_leaf = result.nodes[second].children[0]
        assert positions[y_leaf].x - positions[x_leaf].x == 20.0

    def test_no_overlap_within_level(self):
        """Test that no two nodes share a position."""
        result = build_from_source(MIXED_PROGRAM)

        positions = layout(result)
        coordinates = [(p.x, p.y) for p in positions.values()]
        assert len(coordinates) == len(set(coordinates))

    def test_parent_centred_over_children(self):
        """Test that inner nodes sit midway between first and last child."""
        result = build_from_source(MIXED_PROGRAM)

        positions = layout(result)
        for node in result.nodes.values():
            if node.children:
                first = positions[node.children[0]].x
                last = positions[node.children[-1]].x
                assert positions[node.id].x == pytest.approx((first + last) / 2)

    def test_horizontal_orientation_swaps_axes(self):
        """Test that horizontal orientation puts depth on x."""
        result = build_from_source(MIXED_PROGRAM)

        vertical = layout(result, LayoutConfig(orientation="vertical"))
        horizontal = layout(result, LayoutConfig(orientation="horizontal"))
        for node_id in result.nodes:
            assert horizontal[node_id].x == vertical[node_id].y
            assert horizontal[node_id].y == vertical[node_id].x


class TestLayoutConfig:
    """Tests for configuration validation."""

    def test_rejects_non_positive_spacing(self):
        """Test that zero spacing is rejected."""
        with pytest.raises(ValueError):
            LayoutConfig(node_spacing=0)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_rejects_non_finite_spacing(self, value):
        """Test that NaN and infinite spacing are rejected."""
        with pytest.raises(ValueError):
            LayoutConfig(node_spacing=value)
        with pytest.raises(ValueError):
            LayoutConfig(level_spacing=value)

    def test_rejects_unknown_orientation(self):
        """Test that orientation is a closed choice."""
        with pytest.raises(ValueError):
            LayoutConfig(orientation="radial")


class TestBounds:
    """Tests for the bounding box helper."""

    def test_bounds_of_layout(self):
        """Test that bounds enclose every node."""
        result = build_from_source(MIXED_PROGRAM)
        positions = layout(result)

        min_x, min_y, max_x, max_y = bounds(positions)
        assert min_x == 0.0
        assert min_y == 0.0
        for p in positions.values():
            assert min_x <= p.x <= max_x
            assert min_y <= p.y <= max_y

    def test_bounds_of_empty_layout(self):
        """Test the degenerate box."""
        assert bounds({}) == (0.0, 0.0, 0.0, 0.0)
