"""
Export Serializers

Structured exports of an AnalysisResult (optionally with its layout) for
renderers and other consumers:

- result_to_dict: The canonical JSON-ready shape
- to_json: That shape as a JSON string
- to_csv: One row per node, flat

Keys use camelCase so the JSON matches what browser renderers expect.
"""

import csv
import io
import json
from typing import Any, Optional

from patternviz.models import AnalysisNode, AnalysisResult, AnalysisStats, LayoutNode

CSV_COLUMNS = [
    "id",
    "label",
    "kind",
    "rawKind",
    "line",
    "parent",
    "depth",
    "complexity",
    "size",
]


def node_to_dict(node: AnalysisNode, position: Optional[LayoutNode] = None) -> dict[str, Any]:
    """Serialize a single node."""
    data: dict[str, Any] = {
        "id": node.id,
        "label": node.label,
        "kind": node.kind.value,
        "rawKind": node.raw_kind,
        "line": node.line,
        "children": list(node.children),
        "metrics": {
            "complexity": node.metrics.complexity,
            "size": node.metrics.size,
        },
    }
    if position is not None:
        data["x"] = position.x
        data["y"] = position.y
    return data


def stats_to_dict(stats: AnalysisStats) -> dict[str, Any]:
    """Serialize run statistics."""
    return {
        "totalNodes": stats.total_nodes,
        "functions": stats.functions,
        "variables": stats.variables,
        "loops": stats.loops,
        "conditionals": stats.conditionals,
        "classes": stats.classes,
        "imports": stats.imports,
        "others": stats.others,
        "complexity": stats.complexity,
        "linesOfCode": stats.lines_of_code,
        "parseTimeMs": round(stats.parse_time_ms, 3),
        "maxDepth": stats.max_depth,
    }


def result_to_dict(
    result: AnalysisResult,
    positions: Optional[dict[str, LayoutNode]] = None,
) -> dict[str, Any]:
    """
    Serialize a result, nodes in document order.

    Args:
        result: The analysis tree
        positions: Optional layout; adds x/y to every node entry
    """
    positions = positions or {}
    return {
        "dialect": result.dialect.value,
        "root": result.root_id,
        "nodes": [
            node_to_dict(node, positions.get(node.id)) for node in result.nodes.values()
        ],
        "stats": stats_to_dict(result.stats),
    }


def to_json(
    result: AnalysisResult,
    positions: Optional[dict[str, LayoutNode]] = None,
    indent: Optional[int] = 2,
) -> str:
    """Serialize a result as a JSON document."""
    return json.dumps(result_to_dict(result, positions), indent=indent)


def to_csv(
    result: AnalysisResult,
    positions: Optional[dict[str, LayoutNode]] = None,
) -> str:
    """
    Serialize a result as CSV, one row per node in document order.

    x/y columns are appended when a layout is given.
    """
    parents = result.parent_map()
    depths = {node.id: depth for node, depth in result.walk()}
    columns = CSV_COLUMNS + (["x", "y"] if positions else [])

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(columns)
    for node in result.nodes.values():
        row = [
            node.id,
            node.label,
            node.kind.value,
            node.raw_kind,
            node.line,
            parents.get(node.id) or "",
            depths[node.id],
            node.metrics.complexity,
            node.metrics.size,
        ]
        if positions:
            position = positions[node.id]
            row.extend([position.x, position.y])
        writer.writerow(row)
    return buffer.getvalue()
