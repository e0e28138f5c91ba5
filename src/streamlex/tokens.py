"""
Token Types
===========

The token kind enumeration is the stable contract between the lexer and
any downstream parser. Tokens themselves are small immutable values that
carry no reference back to the lexer that produced them.
"""

from dataclasses import dataclass
from enum import Enum, auto

from streamlex.errors import SourceLocation


class TokenKind(Enum):
    """Lexical categories produced by the Tokenizer."""

    IDENTIFIER = auto()       # Names that are not keywords
    NUMBER = auto()           # Digits and dots, unvalidated
    OPERATOR = auto()         # + - * / % = > < ! & | and ==, <=, >=, !=
    KEYWORD = auto()          # Entries of the configured keyword set
    STRING_LITERAL = auto()   # "..." with the quotes stripped
    COMMENT = auto()          # // ... with the slashes stripped
    PARENTHESIS = auto()      # ( )
    BRACKET = auto()          # [ ]
    BRACE = auto()            # { }
    SEMICOLON = auto()        # ;
    COMMA = auto()            # ,
    EOF = auto()              # End of input, lexeme "EOF"
    UNKNOWN = auto()          # Any other single character


# Lexeme reported for the end-of-input token
EOF_LEXEME = "EOF"


@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        kind: The TokenKind classification
        lexeme: Text consumed for the token (string and comment delimiters
            excluded)
        line: Line of the token's first character (1-indexed)
        column: Column of the token's first character (1-indexed)
        filename: Name of the source, for error reporting
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_eof(self) -> bool:
        """Return True if this is the end-of-input token."""
        return self.kind is TokenKind.EOF
