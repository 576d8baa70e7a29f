"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from kslex.lexer import Lexer, LexerOptions, tokenize
from kslex.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding END_OF_INPUT)."""

    def _lex(source: str, **options: bool) -> list[Token]:
        tokens = tokenize(source, options=LexerOptions(**options))
        # Strip trailing END_OF_INPUT for convenience
        return [t for t in tokens if t.kind != TokenKind.END_OF_INPUT]

    return _lex


@pytest.fixture
def lex_with_diagnostics():
    """Return a helper that runs a fresh Lexer and returns (tokens, diagnostics)."""

    def _lex(source: str, **options: bool):
        lexer = Lexer(source, "test.ks", LexerOptions(**options))
        tokens = lexer.tokenize()
        return tokens, lexer.diagnostics

    return _lex


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def pairs(tokens: list[Token]) -> list[tuple[TokenKind, str]]:
    """Reduce tokens to (kind, text) pairs, dropping spans."""
    return [(t.kind, t.text) for t in tokens]


def find_tokens(tokens: list[Token], kind: TokenKind) -> list[Token]:
    """Return all tokens of the given kind."""
    return [t for t in tokens if t.kind == kind]
