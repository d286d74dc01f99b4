"""Minimal LSP server for PicoCalc files — diagnostics only.

Every non-blank line of a document is evaluated as its own expression.
"""

from __future__ import annotations

import re

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from picocalc import __version__
from picocalc.errors import ParseError
from picocalc.evaluator import evaluate

# Line breaks as LSP counts them
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

server = LanguageServer("picocalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def line_diagnostics(source: str) -> list[Diagnostic]:
    """Evaluate each line of source and return one diagnostic per failing line."""
    diagnostics: list[Diagnostic] = []

    for line_no, line in enumerate(_LINE_BREAK.split(source)):
        if not line.strip():
            continue
        try:
            evaluate(line, strict=True)
        except ParseError as exc:
            col = exc.column - 1
            width = max(1, exc.token.length)
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=line_no, character=col),
                        end=Position(line=line_no, character=col + width),
                    ),
                    message=exc.message,
                    severity=DiagnosticSeverity.Error,
                    source="picocalc",
                )
            )

    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=line_diagnostics(doc.source))
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
