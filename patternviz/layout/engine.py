"""
Hierarchical Layout Engine

Computes 2D coordinates for an AnalysisResult so renderers can draw it as
a tidy tree.

Algorithm:
    1. Walk the tree in pre-order (NetworkX DFS, successors in source order).
    2. Give every leaf the next slot on the breadth axis. Two consecutive
       leaves sharing a parent are ``sibling_separation`` slots apart,
       otherwise ``cousin_separation`` slots apart.
    3. Centre every inner node between its first and last child, visiting
       nodes in reverse pre-order so children are placed first.
    4. Depth gives the other axis.

Properties:
    - Deterministic: no randomness, the same result always gives the same
      coordinates, so re-renders never reshuffle the diagram
    - A root-only tree is placed at the origin; a single chain is a
      straight line. Coordinates are bounded by the number of leaves and
      the tree depth.
    - Iterative, safe for very deep trees
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import networkx as nx

from patternviz.models import AnalysisResult, LayoutNode

logger = logging.getLogger(__name__)

ORIENTATIONS = ("vertical", "horizontal")


@dataclass(frozen=True)
class LayoutConfig:
    """
    Layout tuning knobs.

    Attributes:
        node_spacing: Distance of one slot on the breadth axis
        level_spacing: Distance between two depth levels
        sibling_separation: Slots between adjacent leaves of the same parent
        cousin_separation: Slots between adjacent leaves of different parents
        orientation: "vertical" puts depth on y, "horizontal" puts it on x
    """

    node_spacing: float = 120.0
    level_spacing: float = 100.0
    sibling_separation: float = 1.0
    cousin_separation: float = 2.0
    orientation: str = "vertical"

    def __post_init__(self) -> None:
        for name in (
            "node_spacing",
            "level_spacing",
            "sibling_separation",
            "cousin_separation",
        ):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        if self.orientation not in ORIENTATIONS:
            raise ValueError(
                f"orientation must be one of {ORIENTATIONS}, got {self.orientation!r}"
            )


def layout(
    result: AnalysisResult,
    config: Optional[LayoutConfig] = None,
) -> dict[str, LayoutNode]:
    """
    Compute coordinates for every node of ``result``.

    Args:
        result: The analysis tree
        config: Spacing and orientation, defaults to LayoutConfig()

    Returns:
        Mapping from node id to LayoutNode, in pre-order

    Example:
        >>> coords = layout(result)
        >>> coords[result.root_id].y
        0.0
    """
    config = config or LayoutConfig()
    graph = result.to_networkx()
    order = list(nx.dfs_preorder_nodes(graph, source=result.root_id))
    depths = nx.single_source_shortest_path_length(graph, result.root_id)

    slots: dict[str, float] = {}
    previous_parent: Optional[str] = None
    cursor = 0.0
    first_leaf = True
    for node_id in order:
        node = result.nodes[node_id]
        if node.children:
            continue
        parent = next(iter(graph.predecessors(node_id)), None)
        if not first_leaf:
            if parent == previous_parent:
                cursor += config.sibling_separation
            else:
                cursor += config.cousin_separation
        slots[node_id] = cursor
        previous_parent = parent
        first_leaf = False

    for node_id in reversed(order):
        children = result.nodes[node_id].children
        if children:
            slots[node_id] = (slots[children[0]] + slots[children[-1]]) / 2.0

    positions: dict[str, LayoutNode] = {}
    for node_id in order:
        breadth = slots[node_id] * config.node_spacing
        level = depths[node_id] * config.level_spacing
        if config.orientation == "horizontal":
            x, y = level, breadth
        else:
            x, y = breadth, level
        positions[node_id] = LayoutNode(id=node_id, x=x, y=y, depth=depths[node_id])

    logger.debug("Laid out %d nodes (%s)", len(positions), config.orientation)
    return positions


def bounds(positions: dict[str, LayoutNode]) -> tuple[float, float, float, float]:
    """
    Bounding box of a layout as (min_x, min_y, max_x, max_y).

    An empty layout has the degenerate box (0, 0, 0, 0).
    """
    if not positions:
        return (0.0, 0.0, 0.0, 0.0)
    xs = [p.x for p in positions.values()]
    ys = [p.y for p in positions.values()]
    return (min(xs), min(ys), max(xs), max(ys))
