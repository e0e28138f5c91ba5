"""
Lexer Configuration
===================

The lookup tables that drive classification, plus the read-ahead window
size. A LexerConfig is immutable: it is built once, validated once, and
shared by reference between any number of tokenizers.

Configuration can come from:
- Default values (defined here, DEFAULT_CONFIG)
- Environment variables (LexerConfig.from_env)
- Explicit keyword arguments, usually from the lexdump command line

Default tables
--------------
| Option                     | Default                                       |
|----------------------------|-----------------------------------------------|
| keyword_set                | if else while for return int string bool      |
|                            | class void                                    |
| operator_charset           | + - * / % = > < ! & and pipe                  |
| two_char_operator_prefixes | = < > !   (each may be followed by '=')       |
| buffer_width               | 4096 characters per read-ahead window         |
"""

from dataclasses import dataclass, field, replace
from typing import Iterable
import codecs
import logging
import os

from streamlex.errors import ConfigError

logger = logging.getLogger(__name__)


DEFAULT_KEYWORDS = frozenset({
    "if", "else", "while", "for", "return",
    "int", "string", "bool", "class", "void",
})

DEFAULT_OPERATOR_CHARS = frozenset("+-*/%=><!&|")

DEFAULT_TWO_CHAR_PREFIXES = frozenset("=<>!")

DEFAULT_BUFFER_WIDTH = 4096


@dataclass(frozen=True)
class LexerConfig:
    """
    Immutable tokenizer configuration.

    Attributes:
        keyword_set: Words classified as KEYWORD instead of IDENTIFIER
        operator_charset: Characters that start an OPERATOR token
        two_char_operator_prefixes: Operator characters that extend to a
            two-character operator when immediately followed by '='
        buffer_width: Size of each of the two read-ahead windows
        encoding: Text encoding used when the source is opened from a path
    """

    keyword_set: frozenset = field(default=DEFAULT_KEYWORDS)
    operator_charset: frozenset = field(default=DEFAULT_OPERATOR_CHARS)
    two_char_operator_prefixes: frozenset = field(default=DEFAULT_TWO_CHAR_PREFIXES)
    buffer_width: int = DEFAULT_BUFFER_WIDTH
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        # A bare string would otherwise become a set of one-letter keywords
        if isinstance(self.keyword_set, str):
            raise ConfigError(
                f"keyword_set must be a collection of words, got the string "
                f"{self.keyword_set!r}"
            )

        # Accept any iterable for the tables but store frozensets
        object.__setattr__(self, "keyword_set", frozenset(self.keyword_set))
        object.__setattr__(self, "operator_charset", frozenset(self.operator_charset))
        object.__setattr__(
            self, "two_char_operator_prefixes", frozenset(self.two_char_operator_prefixes)
        )
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.buffer_width, int) or self.buffer_width < 1:
            raise ConfigError(
                f"buffer_width must be a positive integer, got {self.buffer_width!r}"
            )

        for char in self.operator_charset:
            if len(char) != 1:
                raise ConfigError(f"operator character {char!r} is not a single character")

        for char in self.two_char_operator_prefixes:
            if len(char) != 1:
                raise ConfigError(f"operator prefix {char!r} is not a single character")
            if char not in self.operator_charset:
                raise ConfigError(
                    f"operator prefix {char!r} is not in the operator character set"
                )

        for word in self.keyword_set:
            if not word:
                raise ConfigError("keyword_set contains an empty keyword")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ConfigError(f"unknown encoding {self.encoding!r}") from None

    # =========================================================================
    # Derived Configurations
    # =========================================================================

    def with_keywords(self, keywords: Iterable[str]) -> "LexerConfig":
        """Return a copy with the keyword set replaced."""
        return replace(self, keyword_set=keywords)

    def with_buffer_width(self, width: int) -> "LexerConfig":
        """Return a copy with a different read-ahead window size."""
        return replace(self, buffer_width=width)

    @classmethod
    def from_env(cls) -> "LexerConfig":
        """
        Create a LexerConfig from environment variables.

        Environment variables (all optional):
            STREAMLEX_BUFFER_WIDTH: Read-ahead window size (integer)
            STREAMLEX_KEYWORDS: Comma-separated keyword list
            STREAMLEX_ENCODING: Encoding for path-based sources

        Invalid values are logged and ignored.

        Returns:
            LexerConfig with values from environment variables
        """
        overrides = {}

        if width := os.environ.get("STREAMLEX_BUFFER_WIDTH"):
            try:
                value = int(width)
            except ValueError:
                value = 0
            if value > 0:
                overrides["buffer_width"] = value
            else:
                logger.warning("Ignoring invalid STREAMLEX_BUFFER_WIDTH=%r", width)

        if keywords := os.environ.get("STREAMLEX_KEYWORDS"):
            overrides["keyword_set"] = frozenset(
                word.strip() for word in keywords.split(",") if word.strip()
            )

        if encoding := os.environ.get("STREAMLEX_ENCODING"):
            try:
                codecs.lookup(encoding)
            except LookupError:
                logger.warning("Ignoring unknown STREAMLEX_ENCODING=%r", encoding)
            else:
                overrides["encoding"] = encoding

        return cls(**overrides)


# Shared read-only configuration used when none is supplied
DEFAULT_CONFIG = LexerConfig()
