"""
streamlex - Streaming Lexer for C-like Source Text
==================================================

This package converts raw source text into a stream of classified tokens
(identifiers, keywords, numbers, operators, string literals, comments and
punctuation), each tagged with its 1-based line and column, ready for a
downstream parser.

Input is read through a double-buffered window, so files of any size and
tokens of any length are scanned without loading the whole input and
without re-reading the underlying stream.

Main Components
---------------
- **source**: WindowedSource, the double-buffered character reader
- **lexer**: Tokenizer, the pull-based scanner (get_next_token)
- **tokens**: TokenKind and the immutable Token value
- **config**: LexerConfig, the pluggable keyword and operator tables
- **cli**: the lexdump command

Quick Start
-----------
    >>> from streamlex import Tokenizer
    >>> with Tokenizer.open("main.src") as lexer:
    ...     for token in lexer.tokenize():
    ...         print(token)

Or from the command line:
    $ lexdump main.src
"""

__version__ = "1.0.0"

from streamlex.config import DEFAULT_CONFIG, LexerConfig
from streamlex.errors import (
    StreamLexError,
    ConfigError,
    DiagnosticsError,
    SourceError,
    SourceOpenError,
    SourceReadError,
    LexicalError,
    UnterminatedStringError,
    SourceLocation,
    DiagnosticCollector,
)
from streamlex.lexer import Tokenizer
from streamlex.source import SENTINEL, WindowedSource
from streamlex.tokens import EOF_LEXEME, Token, TokenKind

__all__ = [
    "__version__",
    # Configuration
    "LexerConfig",
    "DEFAULT_CONFIG",
    # Scanning
    "Tokenizer",
    "WindowedSource",
    "SENTINEL",
    "Token",
    "TokenKind",
    "EOF_LEXEME",
    # Errors
    "StreamLexError",
    "ConfigError",
    "DiagnosticsError",
    "SourceError",
    "SourceOpenError",
    "SourceReadError",
    "LexicalError",
    "UnterminatedStringError",
    "SourceLocation",
    "DiagnosticCollector",
]
