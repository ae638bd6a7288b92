"""
Parser module for Pattern-Viz.

This module provides the tree-sitter based parser adapter that turns
source text into a syntax tree for one ECMAScript dialect.
"""

from patternviz.parser.adapter import (
    SyntaxTree,
    find_first_error,
    load_language,
    parse,
)

__all__ = [
    "SyntaxTree",
    "find_first_error",
    "load_language",
    "parse",
]
