"""
Tests for the parser module.

Tests the tree-sitter parser adapter and its error reporting.
"""

import pytest
from patternviz.errors import ParseError, UnsupportedDialectError
from patternviz.models import Dialect
from patternviz.parser import SyntaxTree, find_first_error, parse
from tests.fixtures import (
    EMPTY,
    MALFORMED,
    MIXED_PROGRAM,
    NESTED_CONSTRUCTS,
    TSX_COMPONENT,
    TYPESCRIPT_TYPES,
)


class TestParse:
    """Tests for successful parses."""

    def test_parse_returns_syntax_tree(self):
        """Test parsing a simple snippet."""
        tree = parse(NESTED_CONSTRUCTS)

        assert isinstance(tree, SyntaxTree)
        assert tree.root.type == "program"
        assert tree.dialect is Dialect.JAVASCRIPT
        assert tree.parse_time_ms >= 0

    def test_parse_empty_source(self):
        """Test that the empty string is a valid program."""
        tree = parse(EMPTY)

        assert tree.root.type == "program"
        assert tree.root.named_child_count == 0

    def test_parse_accepts_dialect_name(self):
        """Test passing the dialect as a string."""
        tree = parse(MIXED_PROGRAM, "javascript")

        assert tree.dialect is Dialect.JAVASCRIPT

    def test_parse_typescript(self):
        """Test the TypeScript grammar."""
        tree = parse(TYPESCRIPT_TYPES, Dialect.TYPESCRIPT)

        kinds = {child.type for child in tree.root.named_children}
        assert "interface_declaration" in kinds
        assert "enum_declaration" in kinds

    def test_parse_tsx(self):
        """Test the TSX grammar accepts JSX with type annotations."""
        tree = parse(TSX_COMPONENT, "tsx")

        assert tree.dialect is Dialect.TSX

    def test_text_of_node(self):
        """Test recovering source text from a node."""
        tree = parse("let answer = 42;")

        declaration = tree.root.named_children[0]
        assert tree.text(declaration) == "let answer = 42;"


class TestParseErrors:
    """Tests for syntax errors and dialect rejection."""

    def test_malformed_source_raises(self):
        """Test that a syntax error raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse(MALFORMED)

        error = exc_info.value
        assert error.message
        assert error.line == 1
        assert error.column >= 1
        assert 0 <= error.offset <= len(MALFORMED)

    def test_error_position_on_later_line(self):
        """Test that the reported line points at the broken statement."""
        source = "let ok = 1;\nlet also = 2;\nif ("

        with pytest.raises(ParseError) as exc_info:
            parse(source)

        assert exc_info.value.line == 3

    def test_str_includes_position(self):
        """Test that str(error) appends the position to the message."""
        with pytest.raises(ParseError) as exc_info:
            parse(MALFORMED)

        error = exc_info.value
        assert str(error) == f"{error.message} at line {error.line}, column {error.column}"

    def test_typescript_syntax_rejected_by_javascript(self):
        """Test that type annotations are errors in plain JavaScript."""
        with pytest.raises(ParseError):
            parse("interface Shape { area(): number }", Dialect.JAVASCRIPT)

    def test_unsupported_dialect(self):
        """Test that unknown dialects are rejected."""
        with pytest.raises(UnsupportedDialectError) as exc_info:
            parse("x = 1", "python")

        assert exc_info.value.dialect == "python"


class TestFindFirstError:
    """Tests for locating error nodes."""

    def test_no_error_in_valid_tree(self):
        """Test that a valid tree has no error node."""
        tree = parse(MIXED_PROGRAM)

        assert find_first_error(tree.root) is None
