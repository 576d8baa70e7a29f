"""kslex: lexical scanner for the .ks scripting language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kslex.lexer import LexerOptions
    from kslex.tokens import Token

__version__ = "0.1.0"


def tokenize(
    source: str,
    filename: str = "input.ks",
    options: LexerOptions | None = None,
    *,
    strict: bool = False,
) -> list[Token]:
    """Lex .ks source into a token list terminated by END_OF_INPUT."""
    from kslex.lexer import tokenize as _tokenize

    return _tokenize(source, filename, options, strict=strict)
