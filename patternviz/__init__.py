"""
Pattern-Viz Engine

Structural code analysis for ECMAScript-family source: parses a snippet,
reduces it to a tree of typed constructs (functions, classes, loops,
conditionals, variables, imports) and lays the tree out for rendering.
"""

from patternviz.errors import (
    AnalyzerError,
    BalanceError,
    InvariantViolation,
    ParseError,
    UnsupportedDialectError,
)
from patternviz.models import (
    AnalysisNode,
    AnalysisResult,
    AnalysisStats,
    ClassifiedKind,
    Dialect,
    LayoutNode,
)
from patternviz.pipeline import AnalysisOutcome, analyze, analyze_async

__all__ = [
    "AnalysisNode",
    "AnalysisOutcome",
    "AnalysisResult",
    "AnalysisStats",
    "AnalyzerError",
    "BalanceError",
    "ClassifiedKind",
    "Dialect",
    "InvariantViolation",
    "LayoutNode",
    "ParseError",
    "UnsupportedDialectError",
    "analyze",
    "analyze_async",
]
__version__ = "0.1.0"
