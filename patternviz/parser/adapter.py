"""
Tree-sitter Parser Adapter

This module wraps the tree-sitter grammars of the ECMAScript family and
turns their output into a SyntaxTree, or a ParseError when the grammar
rejects the source.

Key Components:
    - SyntaxTree: One parse result, owning the tree and the source bytes
    - load_language: Grammar lookup for a Dialect
    - parse: Main entry point for string-based parsing
    - find_first_error: Locates the first ERROR or missing node

Design Decisions:
    - Uses tree-sitter's published per-language grammar packages
    - A fresh tree-sitter Parser is created for every call, so concurrent
      analyses never share parser state
    - tree-sitter recovers from errors on its own; any ERROR or missing
      node makes the whole parse fail, no partial tree is ever returned

Limitation:
    Only the first syntax error is reported. tree-sitter's recovery can
    place the error a few tokens after the true cause.
"""

import importlib
import logging
import time
from dataclasses import dataclass
from typing import Optional

from tree_sitter import Language, Node, Parser, Tree

from patternviz.errors import ParseError, UnsupportedDialectError
from patternviz.models import Dialect

logger = logging.getLogger(__name__)

# Dialect -> (grammar module, language factory)
GRAMMARS: dict[Dialect, tuple[str, str]] = {
    Dialect.JAVASCRIPT: ("tree_sitter_javascript", "language"),
    Dialect.TYPESCRIPT: ("tree_sitter_typescript", "language_typescript"),
    Dialect.TSX: ("tree_sitter_typescript", "language_tsx"),
}

_SNIPPET_LIMIT = 20


@dataclass(frozen=True)
class SyntaxTree:
    """
    A successful parse of one source text.

    Attributes:
        tree: The tree-sitter Tree (external, read-only)
        source: The original source text
        source_bytes: UTF-8 encoding of ``source``, as seen by tree-sitter
        dialect: Dialect used to parse
        parse_time_ms: Wall-clock time spent in the parser
    """

    tree: Tree
    source: str
    source_bytes: bytes
    dialect: Dialect
    parse_time_ms: float = 0.0

    @property
    def root(self) -> Node:
        """The root syntax node (``program``)."""
        return self.tree.root_node

    def text(self, node: Node) -> str:
        """Source text covered by ``node``."""
        return self.source_bytes[node.start_byte : node.end_byte].decode(
            "utf-8", errors="replace"
        )


def load_language(dialect: Dialect) -> Language:
    """
    Load the tree-sitter grammar for ``dialect``.

    Raises:
        UnsupportedDialectError: If the grammar package is not installed
    """
    module_name, factory = GRAMMARS[dialect]
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UnsupportedDialectError(
            dialect.value,
            f"grammar package {module_name.replace('_', '-')} is not installed",
        ) from exc
    return Language(getattr(module, factory)())


def parse(source: str, dialect: "Dialect | str" = Dialect.JAVASCRIPT) -> SyntaxTree:
    """
    Parse ``source`` with the grammar of ``dialect``.

    Args:
        source: Source text, possibly empty
        dialect: A Dialect or its name

    Returns:
        SyntaxTree wrapping the error-free tree

    Raises:
        UnsupportedDialectError: If the dialect is unknown, checked before parsing
        ParseError: If the source contains a syntax error

    Example:
        >>> tree = parse("let x = 1;")
        >>> tree.root.type
        'program'
    """
    resolved = Dialect.from_name(dialect)
    parser = Parser(load_language(resolved))
    source_bytes = source.encode("utf-8")

    start = time.perf_counter()
    tree = parser.parse(source_bytes)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    syntax_tree = SyntaxTree(
        tree=tree,
        source=source,
        source_bytes=source_bytes,
        dialect=resolved,
        parse_time_ms=elapsed_ms,
    )

    if tree.root_node.has_error:
        error = _to_parse_error(syntax_tree, find_first_error(tree.root_node))
        logger.debug("Parse of %d bytes failed: %s", len(source_bytes), error)
        raise error

    logger.debug(
        "Parsed %d bytes as %s in %.2fms", len(source_bytes), resolved.value, elapsed_ms
    )
    return syntax_tree


def find_first_error(root: Node) -> Optional[Node]:
    """
    Return the first ERROR or missing node in document order.

    Subtrees without errors are skipped. Anonymous children are visited
    too, since missing punctuation is reported as an anonymous node.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if not node.has_error:
            continue
        stack.extend(reversed(node.children))
    return None


def _to_parse_error(tree: SyntaxTree, node: Optional[Node]) -> ParseError:
    """Describe the error node as a ParseError with a 1-based position."""
    if node is None:
        return ParseError("Invalid syntax", line=1, column=1, offset=0)

    if node.is_missing:
        message = f"Missing '{node.type}'"
    else:
        snippet = tree.text(node).strip().splitlines()
        text = snippet[0] if snippet else ""
        if len(text) > _SNIPPET_LIMIT:
            text = text[:_SNIPPET_LIMIT] + "..."
        message = f"Unexpected '{text}'" if text else "Unexpected end of input"

    # tree-sitter positions are byte based; report character positions
    prefix = tree.source_bytes[: node.start_byte]
    line_start = prefix.rfind(b"\n") + 1
    offset = len(prefix.decode("utf-8", errors="replace"))
    column = len(prefix[line_start:].decode("utf-8", errors="replace")) + 1
    return ParseError(message, line=prefix.count(b"\n") + 1, column=column, offset=offset)
