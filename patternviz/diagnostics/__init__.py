"""
Diagnostics module for Pattern-Viz.

This module provides lexical well-formedness checks that run before,
and independently from, the full parse.
"""

from patternviz.diagnostics.balance import check_balance, assert_balanced

__all__ = [
    "check_balance",
    "assert_balanced",
]
