"""PicoCalc lexer — hands out tokens one at a time on request."""

from __future__ import annotations

from picocalc.tokens import Token, TokenType, is_digit

_WHITESPACE = frozenset(" \t\r\n")

_SINGLE_CHAR = {
    "+": TokenType.ADD,
    "-": TokenType.SUBTRACT,
    "/": TokenType.DIVIDE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


class Lexer:
    """Pull-based scanner over a single source string.

    The cursor only moves forward. Once the source is exhausted every call to
    :meth:`next_token` returns a fresh EOF token at ``len(source)``.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        return self._pos

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _make(self, tt: TokenType, start: int) -> Token:
        return Token(tt, start, self._pos - start, self._source)

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in _WHITESPACE:
            self._pos += 1

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token. Never raises."""
        self._skip_whitespace()

        start = self._pos
        if self._at_end():
            return self._make(TokenType.EOF, start)

        ch = self._peek()

        if is_digit(ch):
            return self._lex_number()

        if ch == "*":
            self._pos += 1
            if self._peek() == "*":
                self._pos += 1
                return self._make(TokenType.POWER, start)
            return self._make(TokenType.MULTIPLY, start)

        self._pos += 1
        return self._make(_SINGLE_CHAR.get(ch, TokenType.ILLEGAL), start)

    def _lex_number(self) -> Token:
        start = self._pos
        while not self._at_end() and is_digit(self._peek()):
            self._pos += 1
        return self._make(TokenType.NUMBER, start)


def tokenize(source: str) -> list[Token]:
    """Convenience function: lex source up to and including the first EOF."""
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens
