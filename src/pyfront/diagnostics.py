"""Diagnostics shared by the lexical and syntactic channels.

Codes
-----
L = lexical, P = parser (syntactic)

L001 — Unrecognized character
L002 — Unterminated string
L003 — Invalid escape sequence
P001 — Lexical error token in statement position
P002 — Keyword used incorrectly in this context
P003 — Cannot assign to a literal
P004 — Expected a declaration or expression
P005 — Expected a valid expression
P006 — Identifier cannot start with a digit
P007 — Reserved word used as identifier
P008 — Invalid characters in identifier
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyfront.lexer.tokens import Token

DEFAULT_SUGGESTION = "Check the syntax at this position"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding, located at its offending token."""

    code: str           # Machine-readable code, e.g. "P003"
    message: str        # Human-readable diagnostic
    line: int
    column: int
    token: Token
    suggestion: str = DEFAULT_SUGGESTION

    @classmethod
    def at(cls, token: Token, code: str, message: str, suggestion: str = DEFAULT_SUGGESTION) -> Diagnostic:
        return cls(code, message, token.line, token.column, token, suggestion)

    @classmethod
    def from_error_token(cls, token: Token) -> Diagnostic:
        """Lift a lexical ERROR token into the shared diagnostic shape."""
        return cls.at(
            token,
            token.error.code if token.error else "L001",
            token.error.message if token.error else "Unrecognized character",
            token.error.suggestion if token.error else DEFAULT_SUGGESTION,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "token": self.token.to_dict(),
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.code} {self.message}"
