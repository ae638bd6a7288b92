"""
CLI module for Pattern-Viz.

The command-line interface providing analyze, check, layout and dialects commands.
"""

from cli.main import app

__all__ = ["app"]
