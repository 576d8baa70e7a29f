"""Minimal LSP server for kslex: lexer diagnostics only."""

from __future__ import annotations

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

from kslex import __version__
from kslex.errors import DiagnosticKind
from kslex.lexer import Lexer

server = LanguageServer("kslex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)

_SEVERITY = {
    DiagnosticKind.UNTERMINATED_STRING: DiagnosticSeverity.Error,
    DiagnosticKind.UNRECOGNIZED_CHARACTER: DiagnosticSeverity.Warning,
}


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish its diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri

    lexer = Lexer(doc.source, filename)
    lexer.tokenize()

    diagnostics: list[Diagnostic] = []
    for diag in lexer.diagnostics:
        line = diag.position.line - 1
        col = diag.position.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=diag.message,
                severity=_SEVERITY[diag.kind],
                source="kslex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
