"""
Tests for the diagnostics module.

Tests the bracket balance pre-check.
"""

import pytest
from patternviz.diagnostics import check_balance, assert_balanced
from patternviz.errors import AnalyzerError, BalanceError


class TestCheckBalance:
    """Tests for check_balance."""

    def test_balanced_nested_brackets(self):
        """Test that properly nested brackets pass."""
        assert check_balance("(a[b]{c})") is None

    def test_empty_source_is_balanced(self):
        """Test that the empty string passes."""
        assert check_balance("") is None

    def test_text_without_brackets(self):
        """Test that text without brackets passes."""
        assert check_balance("let x = 1;\nlet y = 2;") is None

    def test_mismatched_closer_reported_at_closer(self):
        """Test that '(a[b)' fails at the ')'."""
        error = check_balance("(a[b)")

        assert isinstance(error, BalanceError)
        assert error.character == ")"
        assert error.offset == 4
        assert error.line == 1
        assert error.column == 5
        assert error.unclosed is False

    def test_stray_closer(self):
        """Test a closer with nothing open."""
        error = check_balance("a}")

        assert error is not None
        assert error.character == "}"
        assert error.offset == 1

    def test_unclosed_reports_first_unmatched_opener(self):
        """Test that leftover openers report the first one."""
        error = check_balance("x = [1, (2")

        assert error is not None
        assert error.unclosed is True
        assert error.character == "["
        assert error.offset == 4

    def test_deep_nesting(self):
        """Test that deep nesting is tracked opener by opener."""
        assert check_balance("([{" * 5000 + "}])" * 5000) is None

        error = check_balance("(" + "[" * 5000 + ")")
        assert error is not None
        assert error.character == ")"
        assert error.offset == 5001

    def test_position_on_later_line(self):
        """Test that line and column follow newlines."""
        error = check_balance("if (a) {\n  call(]\n}")

        assert error is not None
        assert error.character == "]"
        assert error.line == 2
        assert error.column == 8

    def test_brackets_in_strings_are_counted(self):
        """Test the documented limitation: strings are not understood."""
        assert check_balance('const s = "(";') is not None

    def test_error_is_analyzer_error(self):
        """Test that BalanceError belongs to the analyzer taxonomy."""
        error = check_balance("(")

        assert isinstance(error, AnalyzerError)
        assert "Unclosed '('" in str(error)
        assert error.to_dict()["error"] == "balance_error"


class TestAssertBalanced:
    """Tests for assert_balanced."""

    def test_passes_silently(self):
        """Test that balanced input does not raise."""
        assert_balanced("{[()]}")

    def test_raises_balance_error(self):
        """Test that unbalanced input raises."""
        with pytest.raises(BalanceError) as exc_info:
            assert_balanced("{[}")

        assert exc_info.value.character == "}"
