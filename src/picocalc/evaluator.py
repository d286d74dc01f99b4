"""PicoCalc evaluator — computes a token stream's value by precedence climbing.

Binary operations are folded as soon as precedence allows; no syntax tree is
built. Grammar::

    expr(min_prec) := atom { binary_op atom }*
    atom           := NUMBER | '(' expr(1) ')'
"""

from __future__ import annotations

import math

from picocalc.errors import (
    NestingTooDeep,
    TrailingInput,
    UnexpectedCharacter,
    UnexpectedEndOfExpression,
    UnknownOperator,
    UnmatchedParenthesis,
)
from picocalc.lexer import Lexer
from picocalc.tokens import OPERATORS, Associativity, Token, TokenType, is_operator

# Deepest paren or right-operand nesting; keeps recursion under the
# interpreter's default limit.
MAX_NESTING = 200


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and math.fmod(x, 2.0) != 0.0


def divide(lhs: float, rhs: float) -> float:
    """IEEE-754 division: a zero divisor gives a signed infinity or nan."""
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


def power(base: float, exponent: float) -> float:
    """Real-valued pow with C library results instead of exceptions."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0.0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # zero to a negative power is a pole; negative base to a fractional power is nan
        if base == 0.0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan


_ARITHMETIC = {
    TokenType.ADD: lambda a, b: a + b,
    TokenType.SUBTRACT: lambda a, b: a - b,
    TokenType.MULTIPLY: lambda a, b: a * b,
    TokenType.DIVIDE: divide,
    TokenType.POWER: power,
}


class Evaluator:
    """Precedence-climbing evaluator holding exactly one token of lookahead."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._current: Token | None = None
        self._depth = 0

    @property
    def current(self) -> Token:
        if self._current is None:
            raise RuntimeError("evaluator has not been primed; call parse()")
        return self._current

    def _advance(self) -> Token:
        tok = self.current
        self._current = self._lexer.next_token()
        return tok

    def parse(self, *, strict: bool = False) -> float:
        """Evaluate the whole expression and return its value.

        With ``strict`` set, tokens left over after a complete top-level
        expression raise :class:`TrailingInput`; otherwise they are ignored.
        An Evaluator consumes its lexer, so parse() may be called only once.
        """
        if self._current is not None:
            raise RuntimeError("evaluator has already parsed its input")
        self._current = self._lexer.next_token()
        value = self.compute_expr(1)
        if strict and self.current.type != TokenType.EOF:
            raise TrailingInput(self.current)
        return value

    def _descend(self, tok: Token, min_precedence: int) -> float:
        """Evaluate a nested sub-expression opened by tok."""
        if self._depth >= MAX_NESTING:
            raise NestingTooDeep(tok)
        self._depth += 1
        try:
            return self.compute_expr(min_precedence)
        finally:
            self._depth -= 1

    def compute_atom(self) -> float:
        tok = self.current

        if tok.type == TokenType.NUMBER:
            self._advance()
            return float(tok.lexeme)

        if tok.type == TokenType.LPAREN:
            self._advance()
            value = self._descend(tok, 1)
            if self.current.type != TokenType.RPAREN:
                raise UnmatchedParenthesis(self.current)
            self._advance()
            return value

        if tok.type == TokenType.EOF:
            raise UnexpectedEndOfExpression(tok)

        raise UnexpectedCharacter(tok)

    def compute_expr(self, min_precedence: int) -> float:
        lhs = self.compute_atom()

        while True:
            op = self.current
            if not is_operator(op.type) or OPERATORS[op.type].precedence < min_precedence:
                if op.type == TokenType.ILLEGAL:
                    raise UnknownOperator(op)
                break

            info = OPERATORS[op.type]
            if info.associativity == Associativity.LEFT:
                next_min = info.precedence + 1
            else:
                next_min = info.precedence

            self._advance()
            rhs = self._descend(op, next_min)
            lhs = _ARITHMETIC[op.type](lhs, rhs)

        return lhs


def evaluate(source: str, *, strict: bool = False) -> float:
    """Convenience function: evaluate source text and return its value."""
    return Evaluator(Lexer(source)).parse(strict=strict)
