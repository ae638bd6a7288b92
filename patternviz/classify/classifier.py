"""
Node Classifier

Maps raw tree-sitter node kinds to the closed ClassifiedKind set. The
KIND_TABLE below is the single place where dialect-specific kind names
are translated; supporting another dialect means extending this table.

The JavaScript and TypeScript grammars share most kind names. Kinds that
only exist in TypeScript (interfaces, type aliases, enums, signatures)
are listed alongside the JavaScript ones.
"""

from tree_sitter import Node

from patternviz.models import ClassifiedKind

KIND_TABLE: dict[str, ClassifiedKind] = {
    # function-like declarations, expressions and methods
    "function_declaration": ClassifiedKind.FUNCTION,
    "function_expression": ClassifiedKind.FUNCTION,
    "function": ClassifiedKind.FUNCTION,
    "generator_function_declaration": ClassifiedKind.FUNCTION,
    "generator_function": ClassifiedKind.FUNCTION,
    "arrow_function": ClassifiedKind.FUNCTION,
    "method_definition": ClassifiedKind.FUNCTION,
    "function_signature": ClassifiedKind.FUNCTION,
    "method_signature": ClassifiedKind.FUNCTION,
    "abstract_method_signature": ClassifiedKind.FUNCTION,
    # declarations introducing bindings
    "lexical_declaration": ClassifiedKind.VARIABLE,
    "variable_declaration": ClassifiedKind.VARIABLE,
    "field_definition": ClassifiedKind.VARIABLE,
    "public_field_definition": ClassifiedKind.VARIABLE,
    # iteration (for_in_statement also covers for-of)
    "for_statement": ClassifiedKind.LOOP,
    "for_in_statement": ClassifiedKind.LOOP,
    "while_statement": ClassifiedKind.LOOP,
    "do_statement": ClassifiedKind.LOOP,
    # branching (else-if is an if_statement inside an else_clause)
    "if_statement": ClassifiedKind.CONDITIONAL,
    "switch_statement": ClassifiedKind.CONDITIONAL,
    "ternary_expression": ClassifiedKind.CONDITIONAL,
    # class and type declarations
    "class_declaration": ClassifiedKind.CLASS,
    "class": ClassifiedKind.CLASS,
    "abstract_class_declaration": ClassifiedKind.CLASS,
    "interface_declaration": ClassifiedKind.CLASS,
    "type_alias_declaration": ClassifiedKind.CLASS,
    "enum_declaration": ClassifiedKind.CLASS,
    # module imports
    "import_statement": ClassifiedKind.IMPORT,
}

# Callees that turn a call_expression into an import
IMPORT_CALLEES = frozenset({"require", "import"})


def classify(raw_kind: str) -> ClassifiedKind:
    """
    Classify a raw syntax kind.

    Pure and total: unknown kinds map to OTHER, nothing ever raises.

    Example:
        >>> classify("for_statement")
        <ClassifiedKind.LOOP: 'loop'>
        >>> classify("binary_expression")
        <ClassifiedKind.OTHER: 'other'>
    """
    return KIND_TABLE.get(raw_kind, ClassifiedKind.OTHER)


def classify_node(node: Node, source: bytes) -> ClassifiedKind:
    """
    Classify a syntax node, refining kinds the table cannot decide.

    ``require("x")`` and dynamic ``import("x")`` are call_expressions in
    the grammar; they are classified as IMPORT by looking at the callee.

    Args:
        node: The syntax node
        source: Source bytes the node's offsets refer to
    """
    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is not None:
            if callee.type == "import":
                return ClassifiedKind.IMPORT
            if callee.type == "identifier":
                name = source[callee.start_byte : callee.end_byte].decode(
                    "utf-8", errors="replace"
                )
                if name in IMPORT_CALLEES:
                    return ClassifiedKind.IMPORT
    return classify(node.type)
