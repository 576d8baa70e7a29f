"""Token kinds, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    # Literals
    STRING_LITERAL = auto()  # content between quotes, delimiters stripped
    NUMBER_LITERAL = auto()  # digit run, uninterpreted

    # Keywords
    STRING_TYPE_KEYWORD = auto()  # string
    INT_TYPE_KEYWORD = auto()  # int
    FUNCTION_KEYWORD = auto()  # funktion

    VARIABLE_NAME = auto()

    # Structural (single-character)
    FUNCTION_SCOPE_START = auto()  # {
    FUNCTION_SCOPE_END = auto()  # }
    PAREN_LEFT = auto()  # (
    PAREN_RIGHT = auto()  # )

    # Operators / punctuation (single-character)
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    MULTIPLY = auto()  # *
    DIVIDE = auto()  # /
    COLON = auto()  # :
    SEMICOLON = auto()  # ;
    QUOTE_MARK = auto()  # " or ', value is the opening delimiter

    END_OF_INPUT = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token: its kind, lexeme text, and source span."""

    kind: TokenKind
    text: str
    span: Span


KEYWORDS: dict[str, TokenKind] = {
    "string": TokenKind.STRING_TYPE_KEYWORD,
    "int": TokenKind.INT_TYPE_KEYWORD,
    "funktion": TokenKind.FUNCTION_KEYWORD,
}

OPERATORS: dict[str, TokenKind] = {
    "=": TokenKind.ASSIGN,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
}

STRUCTURAL: dict[str, TokenKind] = {
    "{": TokenKind.FUNCTION_SCOPE_START,
    "}": TokenKind.FUNCTION_SCOPE_END,
    "(": TokenKind.PAREN_LEFT,
    ")": TokenKind.PAREN_RIGHT,
}

QUOTES = frozenset("\"'")

# Characters that end an identifier without being part of it
BOUNDARY_CHARS = frozenset(" =(")

_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
_WHITESPACE = frozenset(" \t\r\n")


def is_letter(ch: str) -> bool:
    """Return True if ch is an ASCII letter."""
    return ch in _LETTERS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII digit."""
    return ch in _DIGITS


def is_alnum(ch: str) -> bool:
    """Return True if ch is an ASCII letter or digit."""
    return ch in _LETTERS or ch in _DIGITS


def is_whitespace(ch: str) -> bool:
    """Return True if ch is a space, tab, CR or LF."""
    return ch in _WHITESPACE
