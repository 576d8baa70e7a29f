"""Command-line interface for kslex."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kslex.debug import dump_tokens, tokens_to_json
from kslex.errors import Diagnostic
from kslex.lexer import Lexer, LexerOptions
from kslex.tokens import Token

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    lexer: LexerOptions
    output_format: str
    per_line: bool
    strict: bool


@dataclass(frozen=True, slots=True)
class LexResult:
    """Tokens and diagnostics for one input file."""

    source: str
    tokens: list[Token]
    diagnostics: list[Diagnostic]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="kslex",
        description="Lexical scanner for the .ks scripting language",
    )
    p.add_argument("input", help="Input .ks file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Token dump format (default: text)",
    )
    p.add_argument(
        "--per-line",
        action="store_true",
        default=None,
        help="Lex each line with a fresh lexer",
    )
    p.add_argument(
        "--greedy-keywords",
        action="store_true",
        default=None,
        help="End identifiers as soon as they spell a reserved word",
    )
    p.add_argument(
        "--lax-quotes",
        action="store_true",
        default=None,
        help="Let either quote character close a string",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with status 1 if any diagnostic is reported",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover kslex.toml)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "kslex.toml"

    if not path.is_file():
        return {}

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_bool(section: dict[str, Any], key: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"output option '{key}' must be true or false, got {value!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. Raises ValueError on a bad config.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Lexer options: config < CLI
    cfg_lexer = config.get("lexer", {})
    if not isinstance(cfg_lexer, dict):
        raise ValueError("config section [lexer] must be a table")
    lexer_values = dict(cfg_lexer)
    if args.greedy_keywords:
        lexer_values["greedy_keywords"] = True
    if args.lax_quotes:
        lexer_values["match_quotes"] = False
    lexer = LexerOptions.from_mapping(lexer_values)

    # Output options: config < CLI
    cfg_output = config.get("output", {})
    if not isinstance(cfg_output, dict):
        raise ValueError("config section [output] must be a table")

    output_format = cfg_output.get("format", "text")
    if not isinstance(output_format, str):
        raise ValueError(f"output option 'format' must be a string, got {output_format!r}")
    if args.format is not None:
        output_format = args.format
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"unknown output format '{output_format}'")

    per_line = _config_bool(cfg_output, "per_line")
    if args.per_line:
        per_line = True

    strict = _config_bool(cfg_output, "strict")
    if args.strict:
        strict = True

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        lexer=lexer,
        output_format=output_format,
        per_line=per_line,
        strict=strict,
    )


def lex_file(options: CliOptions) -> LexResult:
    """Read and lex a .ks file, as one unit or one line at a time.

    In per-line mode every line gets its own END_OF_INPUT token.
    """
    source = options.input_file.read_text(encoding="utf-8")
    filename = str(options.input_file)

    if not options.per_line:
        lexer = Lexer(source, filename, options.lexer)
        tokens = lexer.tokenize()
        return LexResult(source, tokens, list(lexer.diagnostics))

    tokens: list[Token] = []
    diagnostics: list[Diagnostic] = []
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line_no, line in enumerate(lines, start=1):
        lexer = Lexer(line, filename, options.lexer, first_line=line_no)
        tokens.extend(lexer.tokenize())
        diagnostics.extend(lexer.diagnostics)
    return LexResult(source, tokens, diagnostics)


def render_tokens(tokens: list[Token], output_format: str) -> str:
    if output_format == "json":
        return tokens_to_json(tokens) + "\n"
    buf = io.StringIO()
    dump_tokens(tokens, file=buf)
    return buf.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        result = lex_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    for diag in result.diagnostics:
        print(diag.format(result.source, str(options.input_file)), file=sys.stderr)

    output = render_tokens(result.tokens, options.output_format)
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if options.strict and result.diagnostics:
        return 1
    return 0
