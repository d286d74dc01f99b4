"""Error types with rendered source line and caret."""

from __future__ import annotations

from picocalc.tokens import Token


def locate_line(source: str, offset: int) -> tuple[int, int]:
    """Return (start, end) of the source line containing offset.

    ``end`` excludes the newline and any carriage return before it. An offset
    of ``len(source)`` (the EOF position) is valid.
    """
    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    if end == -1:
        end = len(source)
    if end > start and source[end - 1] == "\r":
        end -= 1
    return start, end


def render_location(source: str, offset: int) -> str:
    """Render the line holding offset and a caret under that column."""
    start, end = locate_line(source, offset)
    return f"{source[start:end]}\n{' ' * (offset - start)}^"


class ParseError(Exception):
    """Raised on the first evaluation error, located at the offending token."""

    default_message = "parse error"

    def __init__(self, token: Token, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        self.token = token
        self.source = token.source
        super().__init__(self.format())

    @property
    def offset(self) -> int:
        return self.token.start

    @property
    def line(self) -> int:
        """1-based line number of the offending token."""
        return self.source.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """1-based column of the offending token."""
        start, _ = locate_line(self.source, self.offset)
        return self.offset - start + 1

    @property
    def diagnostic(self) -> str:
        return render_location(self.source, self.offset)

    def format(self) -> str:
        return f"{self.message}:\n{self.diagnostic}"


class UnexpectedEndOfExpression(ParseError):
    default_message = "unexpected end of expression"


class UnexpectedCharacter(ParseError):
    default_message = "unexpected character"


class UnmatchedParenthesis(ParseError):
    default_message = "unmatched '('"


class UnknownOperator(ParseError):
    default_message = "unknown operator"


class TrailingInput(ParseError):
    default_message = "unexpected trailing input"


class NestingTooDeep(ParseError):
    default_message = "expression nested too deeply"
