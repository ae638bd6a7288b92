"""
Bracket Balance Pre-Check

A fast lexical check run before the full parse to give instant feedback on
unmatched ``()``, ``[]`` and ``{}``.

Policy:
    - A closer that does not match the innermost open bracket (or appears
      with nothing open) fails immediately, reported at the closer.
    - Openers still pending at end of input fail with the FIRST unmatched
      opener, reported at its own position.

Limitation:
    The scan does not understand string literals, template literals,
    regular expressions or comments. Brackets inside them are counted, so
    the result is advisory and independent from the real parse.

Space:
    Linear in the nesting depth, not constant. Three per-kind counters
    cannot tell which bracket a closer should match, so ``(a[b)`` would go
    unreported at the ``)``; a stack of pending openers is kept instead.
"""

from typing import Optional

from patternviz.errors import BalanceError

OPENERS = "([{"
CLOSERS = ")]}"
MATCHING: dict[str, str] = dict(zip(CLOSERS, OPENERS))


def check_balance(source: str) -> Optional[BalanceError]:
    """
    Check that every bracket in ``source`` is matched.

    Runs in a single left-to-right pass, linear in the input length.

    Args:
        source: Arbitrary text, possibly empty

    Returns:
        None when balanced, otherwise the BalanceError describing the
        first problem found (the error is returned, not raised)

    Example:
        >>> check_balance("(a[b]{c})") is None
        True
        >>> check_balance("(a[b)").offset
        4
    """
    # (character, offset, line, column) of each pending opener
    pending: list[tuple[str, int, int, int]] = []
    line = 1
    line_start = 0

    for offset, char in enumerate(source):
        if char == "\n":
            line += 1
            line_start = offset + 1
        elif char in OPENERS:
            pending.append((char, offset, line, offset - line_start + 1))
        elif char in CLOSERS:
            if not pending or pending[-1][0] != MATCHING[char]:
                return BalanceError(char, offset, line, offset - line_start + 1)
            pending.pop()

    if pending:
        char, offset, line, column = pending[0]
        return BalanceError(char, offset, line, column, unclosed=True)
    return None


def assert_balanced(source: str) -> None:
    """
    Raise instead of returning when ``source`` is unbalanced.

    Raises:
        BalanceError: If any bracket is unmatched
    """
    error = check_balance(source)
    if error is not None:
        raise error
