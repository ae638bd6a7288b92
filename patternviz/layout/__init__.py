"""
Layout module for Pattern-Viz.

This module computes deterministic 2D coordinates for analysis trees.
"""

from patternviz.layout.engine import LayoutConfig, bounds, layout

__all__ = [
    "LayoutConfig",
    "bounds",
    "layout",
]
