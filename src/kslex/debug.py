"""Token dump, as text or JSON."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from kslex.tokens import Token


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one human-readable line per token to *file*."""
    for tok in tokens:
        pos = tok.span.start
        file.write(f"{tok.kind.name} {tok.text!r} @{pos.line}:{pos.column}\n")


def tokens_to_json(tokens: list[Token]) -> str:
    """Serialize tokens to a JSON array of {kind, text, line, column} objects."""
    payload = [
        {
            "kind": tok.kind.name,
            "text": tok.text,
            "line": tok.span.start.line,
            "column": tok.span.start.column,
        }
        for tok in tokens
    ]
    return json.dumps(payload, indent=2)
