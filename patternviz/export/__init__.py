"""
Export module for Pattern-Viz.

This module serializes analysis results (and their layout) into the
structured formats consumed by renderers.
"""

from patternviz.export.serializers import (
    node_to_dict,
    result_to_dict,
    stats_to_dict,
    to_csv,
    to_json,
)

__all__ = [
    "node_to_dict",
    "result_to_dict",
    "stats_to_dict",
    "to_csv",
    "to_json",
]
