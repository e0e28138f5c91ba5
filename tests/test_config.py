"""
Configuration and Error Reporting Tests
=======================================

Tests for LexerConfig validation, environment overrides, error message
formatting and the diagnostic collector.
"""

import dataclasses

import pytest
from streamlex.config import DEFAULT_CONFIG, LexerConfig
from streamlex.errors import (
    ConfigError,
    DiagnosticCollector,
    DiagnosticsError,
    SourceLocation,
    StreamLexError,
    UnterminatedStringError,
)


# =============================================================================
# LexerConfig Tests
# =============================================================================

class TestLexerConfig:
    """Tests for the immutable lexer configuration."""

    def test_defaults(self):
        """Default tables match the reference lexer."""
        config = LexerConfig()
        assert config.keyword_set == {
            "if", "else", "while", "for", "return",
            "int", "string", "bool", "class", "void",
        }
        assert config.operator_charset == set("+-*/%=><!&|")
        assert config.two_char_operator_prefixes == set("=<>!")
        assert config.buffer_width == 4096

    def test_tables_become_frozensets(self):
        """Any iterable is accepted and stored as a frozenset."""
        config = LexerConfig(keyword_set=["let", "let", "fn"])
        assert config.keyword_set == frozenset({"let", "fn"})
        assert isinstance(config.keyword_set, frozenset)

    def test_frozen(self):
        """Configuration cannot be changed in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.buffer_width = 1

    def test_with_keywords_returns_copy(self):
        """with_keywords leaves the original untouched."""
        custom = DEFAULT_CONFIG.with_keywords(["let"])
        assert custom.keyword_set == {"let"}
        assert "if" in DEFAULT_CONFIG.keyword_set
        assert custom.operator_charset == DEFAULT_CONFIG.operator_charset

    def test_with_buffer_width(self):
        """with_buffer_width validates the new width."""
        assert DEFAULT_CONFIG.with_buffer_width(16).buffer_width == 16
        with pytest.raises(ConfigError):
            DEFAULT_CONFIG.with_buffer_width(0)

    @pytest.mark.parametrize("kwargs", [
        {"buffer_width": 0},
        {"buffer_width": -5},
        {"buffer_width": "big"},
        {"operator_charset": {"+", "=="}},
        {"two_char_operator_prefixes": {"<="}},
        {"two_char_operator_prefixes": {"+"}, "operator_charset": {"-"}},
        {"keyword_set": {"if", ""}},
        {"encoding": "no-such-codec"},
    ])
    def test_invalid_values(self, kwargs):
        """Invalid tables and widths are rejected."""
        with pytest.raises(ConfigError):
            LexerConfig(**kwargs)

    def test_keyword_string_rejected(self):
        """A bare string is not split into one-letter keywords."""
        with pytest.raises(ConfigError, match="collection of words"):
            LexerConfig(keyword_set="while")

    def test_with_keywords_string_rejected(self):
        """with_keywords applies the same check."""
        with pytest.raises(ConfigError):
            DEFAULT_CONFIG.with_keywords("while")
        assert DEFAULT_CONFIG.with_keywords(("while",)).keyword_set == {"while"}

    def test_encoding_alias_accepted(self):
        """Any name the codec registry knows is accepted."""
        assert LexerConfig(encoding="latin-1").encoding == "latin-1"


class TestConfigFromEnv:
    """Tests for environment variable overrides."""

    def test_no_variables(self, monkeypatch):
        """Without overrides from_env equals the defaults."""
        for name in ("STREAMLEX_BUFFER_WIDTH", "STREAMLEX_KEYWORDS", "STREAMLEX_ENCODING"):
            monkeypatch.delenv(name, raising=False)
        assert LexerConfig.from_env() == LexerConfig()

    def test_overrides(self, monkeypatch):
        """Width, keywords and encoding can be set from the environment."""
        monkeypatch.setenv("STREAMLEX_BUFFER_WIDTH", "64")
        monkeypatch.setenv("STREAMLEX_KEYWORDS", "let, fn ,,return")
        monkeypatch.setenv("STREAMLEX_ENCODING", "latin-1")

        config = LexerConfig.from_env()
        assert config.buffer_width == 64
        assert config.keyword_set == {"let", "fn", "return"}
        assert config.encoding == "latin-1"

    def test_invalid_width_ignored(self, monkeypatch):
        """A non-numeric width is ignored."""
        monkeypatch.setenv("STREAMLEX_BUFFER_WIDTH", "lots")
        monkeypatch.delenv("STREAMLEX_KEYWORDS", raising=False)
        assert LexerConfig.from_env().buffer_width == 4096

    @pytest.mark.parametrize("width", ["0", "-1", "-4096"])
    def test_non_positive_width_ignored(self, monkeypatch, caplog, width):
        """Zero and negative widths are logged and ignored like bad text."""
        monkeypatch.setenv("STREAMLEX_BUFFER_WIDTH", width)
        monkeypatch.delenv("STREAMLEX_KEYWORDS", raising=False)
        monkeypatch.delenv("STREAMLEX_ENCODING", raising=False)

        with caplog.at_level("WARNING", logger="streamlex.config"):
            config = LexerConfig.from_env()

        assert config.buffer_width == 4096
        assert "STREAMLEX_BUFFER_WIDTH" in caplog.text

    def test_unknown_encoding_ignored(self, monkeypatch, caplog):
        """An encoding the codec registry does not know is ignored."""
        monkeypatch.setenv("STREAMLEX_ENCODING", "no-such-codec")
        monkeypatch.delenv("STREAMLEX_BUFFER_WIDTH", raising=False)
        monkeypatch.delenv("STREAMLEX_KEYWORDS", raising=False)

        with caplog.at_level("WARNING", logger="streamlex.config"):
            config = LexerConfig.from_env()

        assert config.encoding == "utf-8"
        assert "no-such-codec" in caplog.text


# =============================================================================
# Error Formatting Tests
# =============================================================================

class TestErrorFormatting:
    """Tests for located error messages."""

    def test_hierarchy(self):
        """All errors share the StreamLexError base."""
        assert issubclass(ConfigError, StreamLexError)
        assert issubclass(UnterminatedStringError, StreamLexError)
        assert issubclass(DiagnosticsError, StreamLexError)

    def test_message_with_location_and_hint(self):
        """Location prefix and hint line are included."""
        error = UnterminatedStringError(SourceLocation("main.src", 3, 9))
        text = str(error)
        assert text.startswith("main.src:3:9: error: unterminated string literal")
        assert "hint: add closing" in text

    def test_message_has_no_source_excerpt(self):
        """The message is the location line followed by the hint, nothing else."""
        error = UnterminatedStringError(SourceLocation("main.src", 1, 5))
        lines = str(error).split("\n")
        assert lines == [
            "main.src:1:5: error: unterminated string literal",
            "hint: add closing '\"' to complete the string",
        ]

    def test_no_source_line_argument(self):
        """Located errors only take a location and a hint."""
        with pytest.raises(TypeError):
            UnterminatedStringError(SourceLocation("main.src", 1, 5), source_line="x")

    def test_message_without_location(self):
        """Errors without a location still format."""
        assert str(UnterminatedStringError()).startswith("error: unterminated")


# =============================================================================
# DiagnosticCollector Tests
# =============================================================================

class TestDiagnosticCollector:
    """Tests for batch diagnostic reporting."""

    def test_empty(self):
        """A new collector has nothing to report."""
        collector = DiagnosticCollector()
        assert not collector.has_errors()
        assert collector.error_count() == 0
        collector.raise_if_errors()

    def test_report(self):
        """The report lists each diagnostic and a summary."""
        collector = DiagnosticCollector()
        collector.add(UnterminatedStringError(SourceLocation("a.src", 1, 1)))
        collector.add(UnterminatedStringError(SourceLocation("a.src", 4, 2)))

        report = collector.report()
        assert "a.src:1:1" in report
        assert "a.src:4:2" in report
        assert report.endswith("2 diagnostics")

    def test_max_errors(self):
        """Diagnostics beyond the limit are counted but not stored."""
        collector = DiagnosticCollector(max_errors=1)
        for line in range(1, 4):
            collector.add(UnterminatedStringError(SourceLocation("a.src", line, 1)))

        assert len(collector.errors) == 1
        assert collector.error_count() == 3
        assert "2 more not shown" in collector.report()

    def test_raise_if_errors(self):
        """Collected diagnostics can be raised as one aggregate error."""
        collector = DiagnosticCollector()
        collector.add(UnterminatedStringError(SourceLocation("a.src", 1, 1)))
        with pytest.raises(DiagnosticsError, match="1 diagnostic"):
            collector.raise_if_errors()

    def test_clear(self):
        """clear() empties the collector."""
        collector = DiagnosticCollector(max_errors=1)
        collector.add(UnterminatedStringError())
        collector.add(UnterminatedStringError())
        collector.clear()
        assert not collector.has_errors()
