"""
streamlex Error Hierarchy
=========================

This module defines the exception hierarchy for the streaming lexer.
All exceptions inherit from StreamLexError, allowing callers to catch all
lexer-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
StreamLexError (base)
├── ConfigError - invalid lexer configuration
├── DiagnosticsError - aggregate report of collected diagnostics
├── SourceError (character source problems)
│   ├── SourceOpenError - input cannot be opened (fatal)
│   └── SourceReadError - input failed mid-stream (recorded, not raised)
└── LexicalError (scanning problems)
    └── UnterminatedStringError - string literal hit end of stream

Fatal vs. Recoverable
---------------------
Only SourceOpenError and ConfigError are ever raised while constructing a
lexer. Everything that goes wrong during a scan is recovered locally: the
tokenizer turns it into an ordinary token (or EOF) and records the matching
exception instance in a DiagnosticCollector for callers that want strict
behavior.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import List, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class StreamLexError(Exception):
    """
    Base exception for all streamlex errors.

        try:
            with Tokenizer.open("program.src") as lexer:
                tokens = list(lexer.tokenize())
        except StreamLexError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for in-memory text)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Located Errors
# =============================================================================

class LocatedError(StreamLexError):
    """
    Base for errors that point at a position in the input.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            main.src:3:9: error: unterminated string literal
            hint: add closing '"' to complete the string
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ConfigError(StreamLexError):
    """
    Invalid lexer configuration.

    Raised when a LexerConfig is built with values the scanner cannot
    work with, e.g. a non-positive buffer width or a multi-character
    entry in the operator set.
    """
    pass


# =============================================================================
# Character Source Errors
# =============================================================================

class SourceError(LocatedError):
    """Base exception for problems with the underlying character stream."""
    pass


class SourceOpenError(SourceError):
    """
    The input stream could not be opened.

    This is the only fatal condition of a scan: no token stream is
    produced. The originating OSError is chained as __cause__.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"cannot open '{path}': {reason}",
            hint="check that the file exists and is readable",
        )


class SourceReadError(SourceError):
    """
    Reading failed part-way through the stream.

    The character source treats this like a clean end of stream so the
    scan finishes normally; the instance is kept on the source and in the
    tokenizer's diagnostics so callers can tell the two apart.
    """

    def __init__(self, reason: str, location: Optional[SourceLocation] = None):
        self.reason = reason
        super().__init__(
            f"read failed, input truncated: {reason}",
            location=location,
        )


# =============================================================================
# Scanning Errors
# =============================================================================

class LexicalError(LocatedError):
    """Base exception for malformed constructs found while scanning."""
    pass


class UnterminatedStringError(LexicalError):
    """
    String literal reached end of stream before its closing quote.

    Example:
        greeting = "hello    <end of file>
    """

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint="add closing '\"' to complete the string",
        )


class DiagnosticsError(StreamLexError):
    """
    Aggregate of every diagnostic recorded during a scan.

    The message is the pre-formatted report from DiagnosticCollector.
    """
    pass


# =============================================================================
# Diagnostic Collection
# =============================================================================

class DiagnosticCollector:
    """
    Collects recoverable diagnostics for batch reporting.

    The tokenizer never raises in the middle of a scan. Instead it records
    what went wrong here and keeps producing tokens, so one malformed
    construct does not stop analysis of the rest of the input.

    Example:
        lexer = Tokenizer.open("main.src")
        tokens = list(lexer.tokenize())
        if lexer.diagnostics.has_errors():
            print(lexer.diagnostics.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the collector.

        Args:
            max_errors: Maximum diagnostics to keep; later ones are counted
                but not stored
        """
        self.errors: List[StreamLexError] = []
        self.max_errors = max_errors
        self.dropped = 0

    def add(self, error: StreamLexError) -> None:
        """Add a diagnostic to the collection."""
        if len(self.errors) >= self.max_errors:
            self.dropped += 1
            return
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.errors) > 0 or self.dropped > 0

    def error_count(self) -> int:
        """Return the number of diagnostics seen, including dropped ones."""
        return len(self.errors) + self.dropped

    def report(self) -> str:
        """Format all diagnostics for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.dropped:
            lines.append(f"... {self.dropped} more not shown")

        count = self.error_count()
        word = "diagnostic" if count == 1 else "diagnostics"
        lines.append(f"{count} {word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected diagnostics."""
        self.errors.clear()
        self.dropped = 0

    def raise_if_errors(self) -> None:
        """Raise a DiagnosticsError if any diagnostics were collected."""
        if self.has_errors():
            raise DiagnosticsError(self.report())
