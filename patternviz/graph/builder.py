"""
Analysis Tree Builder for Pattern-Viz

This module walks a tree-sitter syntax tree and produces the simplified
analysis tree: one AnalysisNode per classified construct, linked to the
nearest enclosing classified construct.

Design Decisions:
    - Pre-order traversal over named syntax nodes, iterative so that deep
      trees cannot exhaust the recursion limit
    - Ids come from a per-run monotonic counter ("node-0" is the root)
    - Children keep source order and are never re-sorted
    - Nodes classified as OTHER are skipped unless include_other is set;
      their classified descendants attach to the nearest kept ancestor
    - The finished tree is checked with NetworkX before it is returned

Complexity Metric:
    Each node gets a fixed weight per kind and the run's complexity is the
    sum over all nodes. This is a readability heuristic, not a formal
    cyclomatic complexity: it ignores boolean operators, early returns and
    exception handling entirely.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx
from tree_sitter import Node

from patternviz.classify import classify_node
from patternviz.errors import InvariantViolation
from patternviz.models import (
    AnalysisNode,
    AnalysisResult,
    AnalysisStats,
    ClassifiedKind,
    NodeMetrics,
)
from patternviz.parser import SyntaxTree, parse

logger = logging.getLogger(__name__)

ROOT_LABEL = "Program"
ROOT_KIND = "program"

COMPLEXITY_WEIGHTS: dict[ClassifiedKind, int] = {
    ClassifiedKind.FUNCTION: 2,
    ClassifiedKind.CLASS: 2,
    ClassifiedKind.LOOP: 3,
    ClassifiedKind.CONDITIONAL: 2,
    ClassifiedKind.VARIABLE: 1,
    ClassifiedKind.IMPORT: 1,
    ClassifiedKind.OTHER: 0,
}

BASE_SIZES: dict[ClassifiedKind, int] = {
    ClassifiedKind.CLASS: 30,
    ClassifiedKind.FUNCTION: 24,
    ClassifiedKind.LOOP: 22,
    ClassifiedKind.CONDITIONAL: 20,
    ClassifiedKind.VARIABLE: 16,
    ClassifiedKind.IMPORT: 15,
    ClassifiedKind.OTHER: 12,
}
ROOT_SIZE = 40
SIZE_PER_DESCENDANT = 2
MAX_SIZE = 60

MAX_LABEL_LENGTH = 40

# Parents whose name labels an anonymous function assigned to them
_NAMING_PARENTS = {
    "variable_declarator": "name",
    "assignment_expression": "left",
    "pair": "key",
    "public_field_definition": "name",
    "field_definition": "property",
}


@dataclass
class _Draft:
    """Mutable node used while the tree is being built."""

    id: str
    label: str
    kind: ClassifiedKind
    raw_kind: str
    line: int
    depth: int
    children: list["_Draft"] = field(default_factory=list)


class TreeBuilder:
    """
    Builds an AnalysisResult from a SyntaxTree.

    A builder instance holds per-run state (the id counter), so use one
    instance per tree, or the module-level ``build`` function.

    Usage:
        builder = TreeBuilder(syntax_tree)
        result = builder.build()
    """

    def __init__(self, tree: SyntaxTree, include_other: bool = False) -> None:
        """
        Initialize the builder.

        Args:
            tree: A successful parse
            include_other: Keep nodes classified as OTHER in the result
        """
        self.tree = tree
        self.include_other = include_other
        self._counter = 0

    def build(self) -> AnalysisResult:
        """
        Walk the syntax tree and assemble the analysis tree.

        Returns:
            A new, verified AnalysisResult

        Raises:
            InvariantViolation: If the assembled structure is not a tree
        """
        self._counter = 0
        root = _Draft(
            id=self._next_id(),
            label=ROOT_LABEL,
            kind=ClassifiedKind.OTHER,
            raw_kind=ROOT_KIND,
            line=1,
            depth=0,
        )
        drafts = [root]

        # (syntax node, nearest kept ancestor)
        stack: list[tuple[Node, _Draft]] = [
            (child, root) for child in reversed(self.tree.root.named_children)
        ]
        while stack:
            node, parent = stack.pop()
            kind = classify_node(node, self.tree.source_bytes)

            if kind is not ClassifiedKind.OTHER or self.include_other:
                draft = _Draft(
                    id=self._next_id(),
                    label=self._label_for(node),
                    kind=kind,
                    raw_kind=node.type,
                    line=node.start_point[0] + 1,
                    depth=parent.depth + 1,
                )
                parent.children.append(draft)
                drafts.append(draft)
                parent = draft

            for child in reversed(node.named_children):
                stack.append((child, parent))

        result = self._freeze(drafts)
        verify_tree(result)
        logger.debug(
            "Built analysis tree: %d nodes, depth %d, complexity %d",
            result.stats.total_nodes,
            result.stats.max_depth,
            result.stats.complexity,
        )
        return result

    def _next_id(self) -> str:
        node_id = f"node-{self._counter}"
        self._counter += 1
        return node_id

    def _label_for(self, node: Node) -> str:
        """
        Pick a human-readable label for ``node``.

        Prefers a declared name; falls back to the raw kind.
        """
        label = self._declared_name(node)
        if not label:
            return node.type
        label = " ".join(label.split())
        if len(label) > MAX_LABEL_LENGTH:
            label = label[: MAX_LABEL_LENGTH - 3] + "..."
        return label

    def _declared_name(self, node: Node) -> Optional[str]:
        text = self.tree.text
        name = node.child_by_field_name("name")
        if name is not None:
            return text(name)

        if node.type in ("lexical_declaration", "variable_declaration"):
            names = []
            for declarator in node.named_children:
                if declarator.type == "variable_declarator":
                    target = declarator.child_by_field_name("name")
                    if target is not None:
                        names.append(text(target))
            return ", ".join(names)

        if node.type in ("field_definition", "public_field_definition"):
            prop = node.child_by_field_name("property")
            return text(prop) if prop is not None else None

        if node.type == "import_statement":
            source = node.child_by_field_name("source")
            if source is None:
                # TypeScript `import x = require("x")`
                for child in node.named_children:
                    if child.type == "import_require_clause":
                        source = child.child_by_field_name("source")
                        break
            return _unquote(text(source)) if source is not None else None

        if node.type == "call_expression":
            arguments = node.child_by_field_name("arguments")
            if arguments is not None:
                for argument in arguments.named_children:
                    if argument.type == "string":
                        return _unquote(text(argument))
            return None

        if node.type in ("arrow_function", "function_expression", "function"):
            parent = node.parent
            if parent is not None and parent.type in _NAMING_PARENTS:
                target = parent.child_by_field_name(_NAMING_PARENTS[parent.type])
                if target is not None:
                    return text(target)
        return None

    def _freeze(self, drafts: list[_Draft]) -> AnalysisResult:
        """Turn drafts (in pre-order) into immutable nodes plus stats."""
        descendants: dict[str, int] = {}
        for draft in reversed(drafts):
            descendants[draft.id] = sum(1 + descendants[c.id] for c in draft.children)

        counts = {kind: 0 for kind in ClassifiedKind}
        complexity = 0
        nodes: dict[str, AnalysisNode] = {}
        for index, draft in enumerate(drafts):
            is_root = index == 0
            weight = 0 if is_root else COMPLEXITY_WEIGHTS[draft.kind]
            base = ROOT_SIZE if is_root else BASE_SIZES[draft.kind]
            size = min(MAX_SIZE, base + SIZE_PER_DESCENDANT * descendants[draft.id])
            if not is_root:
                counts[draft.kind] += 1
            complexity += weight
            nodes[draft.id] = AnalysisNode(
                id=draft.id,
                label=draft.label,
                kind=draft.kind,
                raw_kind=draft.raw_kind,
                line=draft.line,
                children=tuple(c.id for c in draft.children),
                metrics=NodeMetrics(complexity=weight, size=size),
            )

        stats = AnalysisStats(
            total_nodes=len(nodes),
            functions=counts[ClassifiedKind.FUNCTION],
            variables=counts[ClassifiedKind.VARIABLE],
            loops=counts[ClassifiedKind.LOOP],
            conditionals=counts[ClassifiedKind.CONDITIONAL],
            classes=counts[ClassifiedKind.CLASS],
            imports=counts[ClassifiedKind.IMPORT],
            others=counts[ClassifiedKind.OTHER],
            complexity=complexity,
            lines_of_code=len(self.tree.source.splitlines()),
            parse_time_ms=self.tree.parse_time_ms,
            max_depth=max(draft.depth for draft in drafts),
        )
        return AnalysisResult(
            root_id=drafts[0].id,
            nodes=nodes,
            stats=stats,
            dialect=self.tree.dialect,
        )


def verify_tree(result: AnalysisResult) -> None:
    """
    Check that ``result`` is a single tree rooted at its root node.

    Checks: every child id exists, no id has two parents, no cycles, and
    every node is reachable from the root.

    Raises:
        InvariantViolation: On any violation
    """
    graph = result.to_networkx()
    if set(graph.nodes) != set(result.nodes):
        unknown = sorted(set(graph.nodes) - set(result.nodes))
        raise InvariantViolation(f"children reference unknown ids: {unknown}")
    edge_count = sum(len(node.children) for node in result.nodes.values())
    if edge_count != graph.number_of_edges():
        raise InvariantViolation("a child id is listed more than once")
    if not nx.is_arborescence(graph):
        raise InvariantViolation("analysis nodes do not form a single rooted tree")
    if graph.in_degree(result.root_id) != 0:
        raise InvariantViolation(f"root {result.root_id!r} has a parent")


def build(tree: SyntaxTree, include_other: bool = False) -> AnalysisResult:
    """
    Build the analysis tree of a parsed source.

    Args:
        tree: A successful parse from ``patternviz.parser.parse``
        include_other: Keep nodes classified as OTHER

    Returns:
        A new AnalysisResult

    Example:
        >>> result = build(parse("function f() { if (x) {} }"))
        >>> result.stats.functions, result.stats.conditionals
        (1, 1)
    """
    return TreeBuilder(tree, include_other=include_other).build()


def build_from_source(
    source: str,
    dialect: str = "javascript",
    include_other: bool = False,
) -> AnalysisResult:
    """
    Parse and build in one step.

    Raises:
        UnsupportedDialectError: If the dialect is unknown
        ParseError: If the source has syntax errors
    """
    return build(parse(source, dialect), include_other=include_other)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return value[1:-1]
    return value
