"""Token types, operator table, and the Token value type."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType


class TokenType(Enum):
    # Binary operators
    ADD = auto()  # +
    SUBTRACT = auto()  # -
    MULTIPLY = auto()  # *
    DIVIDE = auto()  # /
    POWER = auto()  # **

    NUMBER = auto()  # ASCII digit run
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    ILLEGAL = auto()  # any other single character
    EOF = auto()


class Associativity(Enum):
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True, slots=True)
class OperatorInfo:
    """Binding strength of a binary operator; higher precedence binds tighter."""

    precedence: int
    associativity: Associativity


OPERATORS: MappingProxyType[TokenType, OperatorInfo] = MappingProxyType(
    {
        TokenType.ADD: OperatorInfo(1, Associativity.LEFT),
        TokenType.SUBTRACT: OperatorInfo(1, Associativity.LEFT),
        TokenType.MULTIPLY: OperatorInfo(2, Associativity.LEFT),
        TokenType.DIVIDE: OperatorInfo(2, Associativity.LEFT),
        TokenType.POWER: OperatorInfo(3, Associativity.RIGHT),
    }
)


def is_operator(tt: TokenType) -> bool:
    """Return True if tt is a binary operator kind."""
    return tt in OPERATORS


@dataclass(frozen=True, slots=True)
class Token:
    """A view of ``length`` characters of ``source`` starting at ``start``.

    The EOF token sits at ``len(source)`` with zero length.
    """

    type: TokenType
    start: int
    length: int
    source: str = field(repr=False, compare=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def lexeme(self) -> str:
        return self.source[self.start : self.end]


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return len(ch) == 1 and "0" <= ch <= "9"
