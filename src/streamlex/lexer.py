"""
Streaming Lexer (Tokenizer)
===========================

This module implements the token-level half of the streaming lexer. The
Tokenizer pulls characters from a WindowedSource and turns them into
Token values on demand, one per get_next_token() call.

Token Categories
----------------
- Keywords: entries of the configured keyword set (if, while, int, ...)
- Identifiers: letter or underscore, then letters, digits, underscores
- Numbers: digits and dots, taken verbatim (1, 3.14, 1.2.3, 7.)
- Strings: "double quoted", no escape processing, may span lines
- Comments: // to end of line
- Operators: + - * / % = > < ! & | and the two-character forms
  ==, <=, >=, !=
- Punctuation: ( ) [ ] { } ; ,
- Anything else: UNKNOWN, one character per token

Dispatch Order
--------------
Whitespace is skipped first, then the character under the cursor picks
the scanner: end of input, identifier start, digit, double quote, "//",
operator character, and finally the single-character table.

Error Recovery
--------------
The tokenizer never raises once it has been constructed. An unterminated
string literal is returned with whatever text was collected and an
UnterminatedStringError is recorded in `diagnostics`; a read failure in
the source ends the input and its SourceReadError is recorded the first
time EOF is produced. Unrecognized characters become UNKNOWN tokens.

Example Usage
-------------
>>> from streamlex import Tokenizer
>>> lexer = Tokenizer.from_string('if (x >= 10) return "big";')
>>> for token in lexer.tokenize():
...     print(token)
Token(KEYWORD, 'if', 1:1)
Token(PARENTHESIS, '(', 1:4)
Token(IDENTIFIER, 'x', 1:5)
Token(OPERATOR, '>=', 1:7)
Token(NUMBER, '10', 1:10)
Token(PARENTHESIS, ')', 1:12)
Token(KEYWORD, 'return', 1:14)
Token(STRING_LITERAL, 'big', 1:21)
Token(SEMICOLON, ';', 1:26)
Token(EOF, 'EOF', 1:27)
"""

from pathlib import Path
from typing import Iterator, Union
import logging
import string

from streamlex.config import DEFAULT_CONFIG, LexerConfig
from streamlex.errors import (
    DiagnosticCollector,
    SourceLocation,
    UnterminatedStringError,
)
from streamlex.source import SENTINEL, ANONYMOUS_SOURCE, WindowedSource
from streamlex.tokens import EOF_LEXEME, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Character Classes
# =============================================================================

WHITESPACE = frozenset(" \t\n\r\f\v")

# Characters that can start an identifier
IDENT_START = frozenset(string.ascii_letters + "_")

# Characters that can continue an identifier
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")

DIGITS = frozenset(string.digits)

# Characters that continue a number after its first digit
NUMBER_CHARS = frozenset(string.digits + ".")

# Fallback classification for characters that start no longer token
SINGLE_CHAR_KINDS: dict[str, TokenKind] = {
    "(": TokenKind.PARENTHESIS,
    ")": TokenKind.PARENTHESIS,
    "[": TokenKind.BRACKET,
    "]": TokenKind.BRACKET,
    "{": TokenKind.BRACE,
    "}": TokenKind.BRACE,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
}


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Pull-based tokenizer over a WindowedSource.

    Each get_next_token() call skips whitespace, scans exactly one token
    and leaves the cursor on the first character after it. Nothing but
    the source position carries over from one call to the next.

    Usage:
        with Tokenizer.open("main.src") as lexer:
            for token in lexer.tokenize():
                print(token)

    Attributes:
        source: The character source being scanned (owned)
        config: Keyword and operator tables
        diagnostics: Recoverable problems found during the scan
        token_count: Tokens returned so far, EOF tokens included
    """

    def __init__(self, source: WindowedSource, config: LexerConfig = DEFAULT_CONFIG):
        self.source = source
        self.config = config
        self.diagnostics = DiagnosticCollector()
        self.token_count = 0
        self._eof_reached = False

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        config: LexerConfig = DEFAULT_CONFIG,
    ) -> "Tokenizer":
        """
        Create a tokenizer reading from a file.

        Raises:
            SourceOpenError: If the file cannot be opened
        """
        source = WindowedSource(
            path,
            buffer_width=config.buffer_width,
            encoding=config.encoding,
        )
        return cls(source, config)

    @classmethod
    def from_string(
        cls,
        text: str,
        config: LexerConfig = DEFAULT_CONFIG,
        name: str = ANONYMOUS_SOURCE,
    ) -> "Tokenizer":
        """Create a tokenizer over in-memory text."""
        source = WindowedSource.from_string(text, buffer_width=config.buffer_width, name=name)
        return cls(source, config)

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying source."""
        self.source.close()

    # =========================================================================
    # Public API
    # =========================================================================

    def get_next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the input is exhausted every call returns an EOF token.
        """
        self._skip_whitespace()

        source = self.source
        start_line = source.line
        start_column = source.column
        char = source.current()

        if char == SENTINEL:
            token = self._scan_eof(start_line, start_column)
        elif char in IDENT_START:
            token = self._scan_identifier(start_line, start_column)
        elif char in DIGITS:
            token = self._scan_number(start_line, start_column)
        elif char == '"':
            token = self._scan_string(start_line, start_column)
        elif char == "/" and source.peek_next() == "/":
            token = self._scan_comment(start_line, start_column)
        elif char in self.config.operator_charset:
            token = self._scan_operator(start_line, start_column)
        else:
            token = self._scan_single(start_line, start_column)

        self.token_count += 1
        logger.debug("%r", token)
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until the input is exhausted.

        Yields:
            Every token in order, ending with exactly one EOF token
        """
        while True:
            token = self.get_next_token()
            yield token
            if token.is_eof():
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(self, kind: TokenKind, lexeme: str, line: int, column: int) -> Token:
        return Token(kind, lexeme, line, column, self.source.name)

    def _skip_whitespace(self) -> None:
        source = self.source
        while source.current() in WHITESPACE:
            source.advance()

    # =========================================================================
    # Scanners
    # =========================================================================

    def _scan_eof(self, start_line: int, start_column: int) -> Token:
        """Produce the end-of-input token, reporting a truncated read once."""
        if not self._eof_reached:
            self._eof_reached = True
            if self.source.read_error is not None:
                self.diagnostics.add(self.source.read_error)
            logger.info(
                "Finished scanning %s: %d tokens, %d diagnostics",
                self.source.name,
                self.token_count + 1,
                self.diagnostics.error_count(),
            )
        return self._make_token(TokenKind.EOF, EOF_LEXEME, start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        Keywords are matched exactly and case-sensitively against the
        configured keyword set.
        """
        source = self.source
        chars = []
        while source.current() in IDENT_CHARS:
            chars.append(source.advance())

        name = "".join(chars)
        kind = TokenKind.KEYWORD if name in self.config.keyword_set else TokenKind.IDENTIFIER
        return self._make_token(kind, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        Digits and dots are taken as they come; "1.2.3" and "7." are valid
        lexemes here and are left for a later pass to reject.
        """
        source = self.source
        chars = []
        while source.current() in NUMBER_CHARS:
            chars.append(source.advance())

        return self._make_token(TokenKind.NUMBER, "".join(chars), start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string literal.

        The quotes are not part of the lexeme and the body is taken
        verbatim. Reaching end of input first records a diagnostic and
        returns what was collected.
        """
        source = self.source
        source.advance()  # consume opening "

        chars = []
        while True:
            char = source.current()

            if char == '"':
                source.advance()  # consume closing "
                break

            if char == SENTINEL:
                error = UnterminatedStringError(
                    SourceLocation(source.name, start_line, start_column)
                )
                self.diagnostics.add(error)
                logger.warning("Unterminated string literal at %s", error.location)
                break

            chars.append(source.advance())

        return self._make_token(
            TokenKind.STRING_LITERAL, "".join(chars), start_line, start_column
        )

    def _scan_comment(self, start_line: int, start_column: int) -> Token:
        """Scan a // comment up to, not including, the end of the line."""
        source = self.source
        source.advance()  # consume /
        source.advance()  # consume /

        chars = []
        while source.current() not in ("\n", SENTINEL):
            chars.append(source.advance())

        return self._make_token(TokenKind.COMMENT, "".join(chars), start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """
        Scan an operator.

        A configured prefix character directly followed by '=' forms a
        two-character operator (==, <=, >=, != by default). Every other
        operator is a single character, so "&&" is two tokens.
        """
        source = self.source
        lexeme = source.advance()

        if lexeme in self.config.two_char_operator_prefixes and source.current() == "=":
            lexeme += source.advance()

        return self._make_token(TokenKind.OPERATOR, lexeme, start_line, start_column)

    def _scan_single(self, start_line: int, start_column: int) -> Token:
        """Classify one punctuation character, or UNKNOWN for anything else."""
        char = self.source.advance()
        kind = SINGLE_CHAR_KINDS.get(char, TokenKind.UNKNOWN)
        return self._make_token(kind, char, start_line, start_column)
