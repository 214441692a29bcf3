"""Token types, reserved-word tables and the Token dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenType(Enum):
    """Every distinct token the lexer can produce.

    Member values double as the wire tags consumers match on, so they must
    stay identical to the member names.
    """

    # Words
    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"

    # Literals
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NONE = "NONE"

    # Operators
    ARITHMETIC_OPERATOR = "ARITHMETIC_OPERATOR"
    ASSIGNMENT_OPERATOR = "ASSIGNMENT_OPERATOR"
    COMPARISON_OPERATOR = "COMPARISON_OPERATOR"
    LOGICAL_OPERATOR = "LOGICAL_OPERATOR"
    BITWISE_OPERATOR = "BITWISE_OPERATOR"
    MEMBERSHIP_OPERATOR = "MEMBERSHIP_OPERATOR"
    IDENTITY_OPERATOR = "IDENTITY_OPERATOR"

    # Punctuation
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    COMMA = "COMMA"
    COLON = "COLON"
    SEMICOLON = "SEMICOLON"
    DOT = "DOT"
    ARROW = "ARROW"         # ->

    # Layout and trivia
    NEWLINE = "NEWLINE"
    COMMENT = "COMMENT"     # # comment
    WHITESPACE = "WHITESPACE"  # raw scan only, never in tokenize() output

    # Special
    ERROR = "ERROR"
    EOF = "EOF"


# Reclassification tables for matched identifiers. The three sets are
# disjoint; RESERVED_WORDS is their union.
BOOLEAN_LITERALS: frozenset[str] = frozenset({"True", "False"})

NONE_LITERALS: frozenset[str] = frozenset({"None"})

KEYWORDS: frozenset[str] = frozenset({
    "and", "as", "assert", "async", "await", "break", "class", "continue",
    "def", "del", "elif", "else", "except", "finally", "for", "from",
    "global", "if", "import", "in", "is", "lambda", "nonlocal", "not", "or",
    "pass", "raise", "return", "try", "while", "with", "yield",
})

RESERVED_WORDS: frozenset[str] = BOOLEAN_LITERALS | NONE_LITERALS | KEYWORDS

# Token kinds the parser discards before deriving statements.
TRIVIA_TYPES: frozenset[TokenType] = frozenset({TokenType.WHITESPACE, TokenType.COMMENT})

# Token kinds that may start a bare expression statement.
LITERAL_TYPES: frozenset[TokenType] = frozenset({
    TokenType.IDENTIFIER,
    TokenType.INTEGER,
    TokenType.FLOAT,
    TokenType.STRING,
    TokenType.BOOLEAN,
    TokenType.NONE,
})


def classify_word(word: str) -> TokenType:
    """Reclassify a matched identifier into its final token type."""
    if word in BOOLEAN_LITERALS:
        return TokenType.BOOLEAN
    if word in NONE_LITERALS:
        return TokenType.NONE
    if word in KEYWORDS:
        return TokenType.KEYWORD
    return TokenType.IDENTIFIER


@dataclass(frozen=True, slots=True)
class LexicalErrorDetail:
    """Why the lexer rejected a span, and how to fix it."""

    code: str
    message: str
    suggestion: str


@dataclass(frozen=True, slots=True)
class Token:
    """A single token produced by the lexer.

    Tokens are immutable and carry the 1-based position of their first
    character. Error tokens also carry a `LexicalErrorDetail`.
    """

    type: TokenType
    value: str
    line: int
    column: int
    error: LexicalErrorDetail | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "value": self.value,
            "line": self.line,
            "column": self.column,
        }
        if self.error is not None:
            data["error"] = {
                "message": self.error.message,
                "suggestion": self.error.suggestion,
            }
        return data

    def __repr__(self) -> str:
        if self.type in (TokenType.NEWLINE, TokenType.EOF):
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
