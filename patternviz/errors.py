"""
Error Taxonomy for Pattern-Viz

Every user-facing failure of the analysis pipeline is an AnalyzerError:

- BalanceError: an unmatched bracket found by the lexical pre-check.
  Recoverable; the pipeline records it as a warning and still parses.
- ParseError: the grammar rejected the source. Fatal for the run.
- UnsupportedDialectError: the requested dialect is not in the closed
  set of supported dialects. Fatal, raised before any parse attempt.

InvariantViolation is deliberately NOT an AnalyzerError: it signals a bug
in the tree builder and must never be turned into a user-facing outcome.
"""

from typing import Any, Optional


class AnalyzerError(Exception):
    """Base class for failures reported to the caller of the analyzer."""

    kind = "analyzer_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the CLI's JSON output."""
        return {"error": self.kind, "message": self.message}


class BalanceError(AnalyzerError):
    """
    An unmatched bracket, parenthesis or brace.

    Attributes:
        character: The offending character. For a stray or mismatched
                   closer this is the closer itself; for brackets left open
                   at end of input it is the first unmatched opener.
        offset: 0-based character offset of ``character`` in the source
        line: 1-indexed line of ``character``
        column: 1-indexed column of ``character``
        unclosed: True when the error describes an opener left open at
                  end of input, False for an unexpected closer
    """

    kind = "balance_error"

    def __init__(
        self,
        character: str,
        offset: int,
        line: int,
        column: int,
        unclosed: bool = False,
    ) -> None:
        what = "Unclosed" if unclosed else "Unmatched"
        super().__init__(f"{what} '{character}' at line {line}, column {column}")
        self.character = character
        self.offset = offset
        self.line = line
        self.column = column
        self.unclosed = unclosed

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            character=self.character,
            offset=self.offset,
            line=self.line,
            column=self.column,
            unclosed=self.unclosed,
        )
        return data


class ParseError(AnalyzerError):
    """
    The source is malformed for the requested dialect.

    ``message`` is kept exactly as produced by the parser adapter so that
    callers can show it to the user unmodified; ``str(error)`` appends the
    position.

    Attributes:
        message: Parser-provided description of the problem
        line: 1-indexed line of the first syntax error
        column: 1-indexed column of the first syntax error
        offset: 0-based character offset of the first syntax error
    """

    kind = "parse_error"

    def __init__(self, message: str, line: int, column: int, offset: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column
        self.offset = offset

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column}"

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(line=self.line, column=self.column, offset=self.offset)
        return data


class UnsupportedDialectError(AnalyzerError):
    """The requested dialect cannot be analyzed."""

    kind = "unsupported_dialect"

    def __init__(self, dialect: str, reason: Optional[str] = None) -> None:
        message = f"Unsupported dialect: {dialect!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.dialect = dialect

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["dialect"] = self.dialect
        return data


class InvariantViolation(AssertionError):
    """The analysis tree is not a tree. Always a programming error."""
