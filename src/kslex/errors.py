"""Diagnostic and error types with formatted source context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from kslex.tokens import Position


class DiagnosticKind(Enum):
    UNRECOGNIZED_CHARACTER = auto()
    UNTERMINATED_STRING = auto()


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable problem found while lexing. Lexing continues past it."""

    kind: DiagnosticKind
    message: str
    position: Position

    def format(self, source: str, filename: str = "input.ks") -> str:
        return format_snippet(self.message, self.position, source, filename)


def format_snippet(message: str, position: Position, source: str, filename: str) -> str:
    """Render a message with the offending source line and a caret underneath."""
    # Split on "\n" only, matching the lexer's line counting
    lines = source.split("\n")
    line_idx = position.line - 1
    col = position.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\r")
    else:
        source_line = ""

    pad = " " * (col - 1)

    line_num = str(position.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{position.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}^"
    )


class LexError(Exception):
    """Raised in strict mode on the first diagnostic, with position and source context."""

    def __init__(self, diagnostic: Diagnostic, source: str, filename: str = "input.ks") -> None:
        self.diagnostic = diagnostic
        self.message = diagnostic.message
        self.position = diagnostic.position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    def format(self, filename: str | None = None) -> str:
        return self.diagnostic.format(self.source, filename or self.filename)
