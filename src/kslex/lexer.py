"""kslex lexer: converts .ks source text into a flat token stream."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum, auto

from kslex.errors import Diagnostic, DiagnosticKind, LexError
from kslex.tokens import (
    BOUNDARY_CHARS,
    KEYWORDS,
    OPERATORS,
    QUOTES,
    STRUCTURAL,
    Position,
    Span,
    Token,
    TokenKind,
    is_alnum,
    is_digit,
    is_letter,
    is_whitespace,
)

logger = logging.getLogger(__name__)


class _IdentState(Enum):
    ACCUMULATING = auto()
    MATCHED_KEYWORD = auto()
    AT_BOUNDARY = auto()


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """Behavior switches for the lexer.

    greedy_keywords: stop an identifier as soon as it spells a reserved word,
        so ``stringify`` lexes as ``string`` followed by ``ify``.
    match_quotes: a string must be closed by the same quote character that
        opened it. When False, either quote character closes it.
    """

    greedy_keywords: bool = False
    match_quotes: bool = True

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> LexerOptions:
        """Build options from a config table, e.g. the ``[lexer]`` TOML section."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"unknown lexer option(s): {', '.join(unknown)}")
        for key, value in mapping.items():
            if not isinstance(value, bool):
                raise ValueError(f"lexer option '{key}' must be true or false, got {value!r}")
        return cls(**mapping)  # type: ignore[arg-type]


class Lexer:
    """Tokenize kslex source text into a list of Token objects.

    A Lexer is single-use: construct it over one unit of input (a line or a
    whole file), call tokenize() once, then read tokens and diagnostics.
    """

    def __init__(
        self,
        source: str,
        filename: str = "input.ks",
        options: LexerOptions | None = None,
        *,
        first_line: int = 1,
    ) -> None:
        self._source = source
        self._filename = filename
        self._options = options if options is not None else LexerOptions()
        self._pos = 0
        self._line = first_line
        self._col = 1
        self._tokens: list[Token] = []
        self._diagnostics: list[Diagnostic] = []
        self._consumed = False

    @property
    def tokens(self) -> list[Token]:
        return self._tokens

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    def tokenize(self) -> list[Token]:
        """Scan the full source and return the token list, ending in END_OF_INPUT."""
        if self._consumed:
            raise RuntimeError("Lexer.tokenize() may only be called once per instance")
        self._consumed = True

        while True:
            start = self._current_pos()
            ch = self._advance()
            if not ch:
                break

            if is_whitespace(ch):
                continue
            if is_letter(ch):
                self._lex_identifier(ch, start)
            elif ch in QUOTES:
                self._lex_string(ch, start)
            elif is_digit(ch):
                self._lex_integer(ch, start)
            elif ch in OPERATORS:
                self._emit(OPERATORS[ch], ch, start)
            elif ch in STRUCTURAL:
                self._emit(STRUCTURAL[ch], ch, start)
            else:
                logger.debug("skipping unrecognized character %r at %d:%d", ch, start.line, start.column)
                self._diagnose(
                    DiagnosticKind.UNRECOGNIZED_CHARACTER, f"unrecognized character {ch!r}", start
                )

        self._emit(TokenKind.END_OF_INPUT, "", self._current_pos())
        logger.debug(
            "%s: %d tokens, %d diagnostics",
            self._filename,
            len(self._tokens),
            len(self._diagnostics),
        )
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        """Consume and return the next character, or "" when input is exhausted."""
        if self._pos >= len(self._source):
            return ""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _emit(self, kind: TokenKind, text: str, start: Position) -> Token:
        tok = Token(kind, text, Span(start, self._current_pos()))
        self._tokens.append(tok)
        return tok

    def _diagnose(self, kind: DiagnosticKind, message: str, pos: Position) -> None:
        self._diagnostics.append(Diagnostic(kind, message, pos))

    # ------------------------------------------------------------------
    # Identifiers and keywords
    # ------------------------------------------------------------------

    def _lex_identifier(self, first: str, start: Position) -> None:
        lexeme = first
        state = _IdentState.ACCUMULATING

        while state is _IdentState.ACCUMULATING:
            if self._options.greedy_keywords and lexeme in KEYWORDS:
                state = _IdentState.MATCHED_KEYWORD
            elif is_alnum(self._peek()):
                lexeme += self._advance()
            else:
                state = _IdentState.AT_BOUNDARY

        if state is _IdentState.MATCHED_KEYWORD:
            self._emit(KEYWORDS[lexeme], lexeme, start)
            return

        nxt = self._peek()
        if nxt and nxt not in BOUNDARY_CHARS:
            logger.debug("identifier %r ends at non-boundary character %r", lexeme, nxt)
        self._emit(KEYWORDS.get(lexeme, TokenKind.VARIABLE_NAME), lexeme, start)

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string(self, opener: str, start: Position) -> None:
        self._emit(TokenKind.QUOTE_MARK, opener, start)

        closers = frozenset(opener) if self._options.match_quotes else QUOTES
        content_start = self._current_pos()
        chars = []
        stray_quote = ""
        while True:
            ch = self._peek()
            if not ch:
                message = "unterminated string literal"
                if stray_quote:
                    message += f" (opened with {opener!r}, found {stray_quote!r})"
                logger.debug("%s at %d:%d", message, start.line, start.column)
                self._diagnose(DiagnosticKind.UNTERMINATED_STRING, message, start)
                return
            if ch in closers:
                break
            if ch in QUOTES:
                stray_quote = ch
            chars.append(self._advance())

        self._emit(TokenKind.STRING_LITERAL, "".join(chars), content_start)
        close_start = self._current_pos()
        self._advance()  # consume closing quote
        # Closing mark records the opening delimiter, not necessarily the one seen
        self._emit(TokenKind.QUOTE_MARK, opener, close_start)

    # ------------------------------------------------------------------
    # Integers
    # ------------------------------------------------------------------

    def _lex_integer(self, first: str, start: Position) -> None:
        digits = [first]
        while is_digit(self._peek()):
            digits.append(self._advance())
        self._emit(TokenKind.NUMBER_LITERAL, "".join(digits), start)


def tokenize(
    source: str,
    filename: str = "input.ks",
    options: LexerOptions | None = None,
    *,
    strict: bool = False,
) -> list[Token]:
    """Convenience function: tokenize source text and return token list.

    With strict=True the first diagnostic is raised as a LexError.
    """
    lexer = Lexer(source, filename, options)
    tokens = lexer.tokenize()
    if strict and lexer.diagnostics:
        raise LexError(lexer.diagnostics[0], source, filename)
    return tokens
