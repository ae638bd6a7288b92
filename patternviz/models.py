"""
Core Data Models for Pattern-Viz

This module defines the canonical data structures used throughout the system:
- Dialect: The closed set of source dialects the analyzer accepts
- ClassifiedKind: The closed set of semantic categories for syntax nodes
- AnalysisNode: One construct in the simplified analysis tree
- AnalysisResult: The full tree produced by one analysis run
- LayoutNode: 2D coordinates derived from an AnalysisResult

These models are designed to be:
- Immutable (frozen dataclasses, read-only mappings)
- Serializable for export
- Created fresh per analysis call, never shared between runs
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import networkx as nx

from patternviz.errors import UnsupportedDialectError


class Dialect(Enum):
    """
    Source dialects of the ECMAScript family.

    Each member maps to one tree-sitter grammar. Dialects outside this
    enumeration are rejected before any parse is attempted.
    """

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"

    @classmethod
    def from_name(cls, name: "str | Dialect") -> "Dialect":
        """
        Resolve a dialect from its name (case-insensitive).

        Raises:
            UnsupportedDialectError: If the name is not a supported dialect
        """
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower()
        normalized = DIALECT_ALIASES.get(normalized, normalized)
        for dialect in cls:
            if dialect.value == normalized:
                return dialect
        raise UnsupportedDialectError(str(name))

    @classmethod
    def from_path(cls, path: "Path | str") -> "Dialect":
        """
        Resolve a dialect from a file extension.

        Raises:
            UnsupportedDialectError: If the extension is not recognized
        """
        suffix = Path(path).suffix.lower()
        dialect = EXTENSION_MAP.get(suffix)
        if dialect is None:
            raise UnsupportedDialectError(suffix or str(path), "unknown file extension")
        return dialect


DIALECT_ALIASES: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "ecmascript": "javascript",
    "ts": "typescript",
}

EXTENSION_MAP: dict[str, Dialect] = {
    ".js": Dialect.JAVASCRIPT,
    ".mjs": Dialect.JAVASCRIPT,
    ".cjs": Dialect.JAVASCRIPT,
    ".jsx": Dialect.JAVASCRIPT,
    ".ts": Dialect.TYPESCRIPT,
    ".mts": Dialect.TYPESCRIPT,
    ".cts": Dialect.TYPESCRIPT,
    ".tsx": Dialect.TSX,
}


class ClassifiedKind(Enum):
    """
    Semantic category of a syntax node.

    The set is closed: every raw syntax kind of every dialect is reduced
    to exactly one of these values, with OTHER as the catch-all.
    """

    FUNCTION = "function"
    VARIABLE = "variable"
    LOOP = "loop"
    CONDITIONAL = "conditional"
    CLASS = "class"
    IMPORT = "import"
    OTHER = "other"


@dataclass(frozen=True)
class NodeMetrics:
    """
    Deterministic per-node metrics.

    Attributes:
        complexity: Heuristic weight of the construct (loops and
                    conditionals weigh more than variables). This is a
                    readability proxy, not cyclomatic complexity.
        size: Display-size hint for renderers, grows with the number of
              descendants and is capped
    """

    complexity: int
    size: int


@dataclass(frozen=True)
class AnalysisNode:
    """
    One construct in the analysis tree.

    Attributes:
        id: Identifier unique within one analysis run ("node-<n>", assigned
            in document order; the synthetic root is "node-0")
        label: Human-readable descriptor, the declared name when there is
               one, otherwise the raw syntax kind
        kind: Semantic category
        raw_kind: The syntax-tree kind this node was built from
        line: 1-indexed line where the construct begins
        children: Ids of the child nodes, in source order
        metrics: Complexity weight and display-size hint

    Invariants:
        - line >= 1
        - children only reference ids of the same run
    """

    id: str
    label: str
    kind: ClassifiedKind
    raw_kind: str
    line: int
    children: tuple[str, ...] = ()
    metrics: NodeMetrics = field(default_factory=lambda: NodeMetrics(0, 0))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.line < 1:
            raise ValueError(f"line ({self.line}) must be >= 1")

    @property
    def is_leaf(self) -> bool:
        """True if the node has no children."""
        return not self.children


@dataclass(frozen=True)
class AnalysisStats:
    """
    Run-level statistics.

    ``total_nodes`` counts the synthetic root, so it always equals the
    number of entries in the node mapping and is 1 for an empty source.
    """

    total_nodes: int = 0
    functions: int = 0
    variables: int = 0
    loops: int = 0
    conditionals: int = 0
    classes: int = 0
    imports: int = 0
    others: int = 0
    complexity: int = 0
    lines_of_code: int = 0
    parse_time_ms: float = 0.0
    max_depth: int = 0

    def count(self, kind: ClassifiedKind) -> int:
        """Number of nodes of the given kind (the root counts as OTHER)."""
        return getattr(self, _STAT_FIELDS[kind])


_STAT_FIELDS: dict[ClassifiedKind, str] = {
    ClassifiedKind.FUNCTION: "functions",
    ClassifiedKind.VARIABLE: "variables",
    ClassifiedKind.LOOP: "loops",
    ClassifiedKind.CONDITIONAL: "conditionals",
    ClassifiedKind.CLASS: "classes",
    ClassifiedKind.IMPORT: "imports",
    ClassifiedKind.OTHER: "others",
}


@dataclass(frozen=True)
class AnalysisResult:
    """
    The analysis tree of one source text.

    Owns the full id -> AnalysisNode mapping (in document order) plus the
    run statistics. A new source string always produces a new result; a
    result is never mutated in place.

    Attributes:
        root_id: Id of the synthetic root node
        nodes: Read-only mapping from id to node
        stats: Run-level statistics
        dialect: Dialect the source was parsed as
    """

    root_id: str
    nodes: Mapping[str, AnalysisNode]
    stats: AnalysisStats
    dialect: Dialect = Dialect.JAVASCRIPT

    def __post_init__(self) -> None:
        if not isinstance(self.nodes, MappingProxyType):
            object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        if self.root_id not in self.nodes:
            raise ValueError(f"root id {self.root_id!r} is not in the node mapping")

    @property
    def root(self) -> AnalysisNode:
        """The synthetic root node."""
        return self.nodes[self.root_id]

    def get(self, node_id: str) -> Optional[AnalysisNode]:
        """Retrieve a node by id, None if unknown."""
        return self.nodes.get(node_id)

    def children_of(self, node_id: str) -> list[AnalysisNode]:
        """Child nodes of ``node_id`` in source order."""
        return [self.nodes[child] for child in self.nodes[node_id].children]

    def by_kind(self, kind: ClassifiedKind) -> list[AnalysisNode]:
        """All nodes of the given kind, in document order."""
        return [node for node in self.nodes.values() if node.kind == kind]

    def walk(self) -> Iterator[tuple[AnalysisNode, int]]:
        """
        Iterate over (node, depth) pairs in pre-order, starting at the root.

        Iterative, so arbitrarily deep trees do not hit the recursion limit.
        """
        stack = [(self.root_id, 0)]
        while stack:
            node_id, depth = stack.pop()
            node = self.nodes[node_id]
            yield node, depth
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    def parent_map(self) -> dict[str, Optional[str]]:
        """Mapping from each id to its parent's id (None for the root)."""
        parents: dict[str, Optional[str]] = {self.root_id: None}
        for node in self.nodes.values():
            for child in node.children:
                parents[child] = node.id
        return parents

    def to_networkx(self) -> nx.DiGraph:
        """
        Build a NetworkX DiGraph with parent -> child edges.

        A new graph is returned on every call. Successor order follows
        the source order of children.
        """
        graph = nx.DiGraph()
        for node in self.nodes.values():
            graph.add_node(node.id, kind=node.kind.value, label=node.label)
        for node in self.nodes.values():
            for child in node.children:
                graph.add_edge(node.id, child)
        return graph


@dataclass(frozen=True)
class LayoutNode:
    """
    Coordinates of one node for rendering.

    Purely derived from an AnalysisResult; recomputable at any time.
    """

    id: str
    x: float
    y: float
    depth: int = 0
