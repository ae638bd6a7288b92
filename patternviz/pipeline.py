"""
Analysis Pipeline

The top-level entry point: Diagnostics -> Parse -> Classify/Build.

Lower layers raise typed AnalyzerErrors; this module is the single place
where they are turned into an AnalysisOutcome, so callers branch on the
outcome instead of catching exceptions. Programming errors
(InvariantViolation) are not caught.

Academic Context:
    Input: Source text + dialect selector
    Transformation: Bracket pre-check, tree-sitter parse, pre-order build
    Output: AnalysisOutcome holding either an AnalysisResult or an error
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from patternviz import config
from patternviz.diagnostics import check_balance
from patternviz.errors import AnalyzerError, BalanceError
from patternviz.graph import build
from patternviz.models import AnalysisResult, Dialect
from patternviz.parser import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    Result of one ``analyze`` call.

    Exactly one of ``result`` and ``error`` is set.

    Attributes:
        result: The analysis tree, None on failure
        error: The fatal error, None on success
        warnings: Non-fatal findings, such as an unbalanced bracket
                  reported by the pre-check while the parse still succeeded
    """

    result: Optional[AnalysisResult] = None
    error: Optional[AnalyzerError] = None
    warnings: tuple[BalanceError, ...] = ()

    @property
    def ok(self) -> bool:
        """True if the analysis produced a result."""
        return self.result is not None

    def unwrap(self) -> AnalysisResult:
        """
        Return the result, or raise the error.

        Raises:
            AnalyzerError: The outcome's error if the analysis failed
        """
        if self.result is None:
            raise self.error or AnalyzerError("analysis produced no result")
        return self.result


def analyze(
    source: str,
    dialect: "Dialect | str | None" = None,
    *,
    include_other: bool = False,
    strict: bool = False,
) -> AnalysisOutcome:
    """
    Analyze one source text.

    Args:
        source: Source text, possibly empty
        dialect: Dialect or dialect name, defaults to PATTERNVIZ_DIALECT
        include_other: Keep syntax nodes classified as OTHER
        strict: Stop at an unbalanced bracket instead of parsing anyway

    Returns:
        AnalysisOutcome; failures are reported in ``error``, never raised

    Example:
        >>> outcome = analyze("function f(){ if (x) { for(;;){} } }")
        >>> outcome.result.stats.loops
        1
    """
    try:
        name = dialect if dialect is not None else config.DEFAULT_DIALECT
        resolved = Dialect.from_name(name)
    except AnalyzerError as exc:
        return AnalysisOutcome(error=exc)

    warnings: tuple[BalanceError, ...] = ()
    balance = check_balance(source)
    if balance is not None:
        logger.info("Bracket pre-check: %s", balance)
        warnings = (balance,)
        if strict:
            return AnalysisOutcome(error=balance, warnings=warnings)

    try:
        tree = parse(source, resolved)
    except AnalyzerError as exc:
        return AnalysisOutcome(error=exc, warnings=warnings)

    result = build(tree, include_other=include_other)
    return AnalysisOutcome(result=result, warnings=warnings)


async def analyze_async(
    source: str,
    dialect: "Dialect | str | None" = None,
    *,
    include_other: bool = False,
    strict: bool = False,
) -> AnalysisOutcome:
    """
    Run ``analyze`` in the event loop's default executor.

    Keeps an event loop (UI, server) responsive while a large input is
    parsed. Analyses share no state, so any number may run concurrently.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        lambda: analyze(source, dialect, include_other=include_other, strict=strict),
    )
