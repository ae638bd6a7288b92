"""
Classification module for Pattern-Viz.

This module reduces raw syntax-tree kinds to the closed set of semantic
categories shown to users.
"""

from patternviz.classify.classifier import (
    KIND_TABLE,
    classify,
    classify_node,
)

__all__ = [
    "KIND_TABLE",
    "classify",
    "classify_node",
]
