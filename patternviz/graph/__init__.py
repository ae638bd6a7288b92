"""
Graph module for Pattern-Viz.

This module builds the analysis tree from a syntax tree and verifies its
tree invariants with NetworkX.
"""

from patternviz.graph.builder import (
    TreeBuilder,
    build,
    build_from_source,
    verify_tree,
)

__all__ = [
    "TreeBuilder",
    "build",
    "build_from_source",
    "verify_tree",
]
