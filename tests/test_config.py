"""Tests for TOML config file loading and merging with CLI flags."""

from __future__ import annotations

from pathlib import Path

import pytest

from kslex.cli import build_parser, load_config, resolve_options
from kslex.lexer import LexerOptions


def _resolve(tmp_path: Path, *flags: str):
    doc = tmp_path / "main.ks"
    doc.write_text("")
    ns = build_parser().parse_args([str(doc), *flags])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[lexer]\ngreedy_keywords = true\n")
        result = load_config(cfg, tmp_path)
        assert result["lexer"] == {"greedy_keywords": True}

    def test_auto_discover_kslex_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "kslex.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(None, tmp_path)
        assert result["output"] == {"format": "json"}


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        opts = _resolve(tmp_path)
        assert opts.lexer == LexerOptions()
        assert opts.output_format == "text"
        assert opts.per_line is False
        assert opts.strict is False
        assert opts.output_file is None


class TestConfigMerge:
    def test_config_lexer_options(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text(
            "[lexer]\ngreedy_keywords = true\nmatch_quotes = false\n"
        )
        opts = _resolve(tmp_path)
        assert opts.lexer == LexerOptions(greedy_keywords=True, match_quotes=False)

    def test_cli_flags_override_config(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("[lexer]\nmatch_quotes = true\n")
        opts = _resolve(tmp_path, "--lax-quotes", "--greedy-keywords")
        assert opts.lexer.match_quotes is False
        assert opts.lexer.greedy_keywords is True

    def test_config_output_section(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text(
            '[output]\nformat = "json"\nper_line = true\nstrict = true\n'
        )
        opts = _resolve(tmp_path)
        assert opts.output_format == "json"
        assert opts.per_line is True
        assert opts.strict is True

    def test_cli_format_overrides_config(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text('[output]\nformat = "json"\n')
        opts = _resolve(tmp_path, "--format", "text")
        assert opts.output_format == "text"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[output]\nstrict = true\n")
        opts = _resolve(tmp_path, "--config", str(cfg))
        assert opts.strict is True


class TestInvalidConfig:
    def test_unknown_lexer_option(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("[lexer]\nfancy = true\n")
        with pytest.raises(ValueError, match="unknown lexer option"):
            _resolve(tmp_path)

    def test_non_boolean_lexer_option(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text('[lexer]\nmatch_quotes = "yes"\n')
        with pytest.raises(ValueError, match="true or false"):
            _resolve(tmp_path)

    def test_unknown_output_format(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text('[output]\nformat = "xml"\n')
        with pytest.raises(ValueError, match="unknown output format"):
            _resolve(tmp_path)

    def test_lexer_section_not_a_table(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("lexer = 3\n")
        with pytest.raises(ValueError, match="must be a table"):
            _resolve(tmp_path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("[lexer\n")
        with pytest.raises(ValueError):
            _resolve(tmp_path)


class TestLexerOptionsFromMapping:
    def test_empty_mapping_gives_defaults(self) -> None:
        assert LexerOptions.from_mapping({}) == LexerOptions()

    def test_values_applied(self) -> None:
        opts = LexerOptions.from_mapping({"greedy_keywords": True})
        assert opts.greedy_keywords is True
        assert opts.match_quotes is True


class TestInvalidOutputConfig:
    def test_string_strict_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text('[output]\nstrict = "false"\n')
        with pytest.raises(ValueError, match="'strict' must be true or false"):
            _resolve(tmp_path)

    def test_string_per_line_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text('[output]\nper_line = "no"\n')
        with pytest.raises(ValueError, match="'per_line' must be true or false"):
            _resolve(tmp_path)

    def test_integer_flag_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("[output]\nstrict = 1\n")
        with pytest.raises(ValueError, match="true or false"):
            _resolve(tmp_path)

    def test_non_string_format_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "kslex.toml").write_text("[output]\nformat = 3\n")
        with pytest.raises(ValueError, match="'format' must be a string"):
            _resolve(tmp_path)
