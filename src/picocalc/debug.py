"""--tokens dump of the lexer output to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from picocalc.lexer import tokenize
from picocalc.tokens import Token


def dump_tokens(source: str, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token of source to *file*, EOF included."""
    for tok in tokenize(source):
        file.write(f"{format_token(tok)}\n")


def format_token(tok: Token) -> str:
    return f"{{ {tok.lexeme!r}, {tok.type.name} @ {tok.start} }}"
