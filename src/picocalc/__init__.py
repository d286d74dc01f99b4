"""PicoCalc arithmetic expression evaluator."""

from __future__ import annotations

__version__ = "0.1.0"


def evaluate(source: str, *, strict: bool = False) -> float:
    """Lex and evaluate an arithmetic expression, returning its value."""
    from picocalc.evaluator import evaluate as _evaluate

    return _evaluate(source, strict=strict)
