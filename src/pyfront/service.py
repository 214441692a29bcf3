"""Analysis envelope for an embedding transport.

The HTTP layer itself lives outside this package. What it needs from us is
here: `analyze` runs both stages, `handle_request` turns a request payload
into a ``(status, body)`` pair, and `health` reports static metadata.
Field names in the bodies are consumed verbatim by clients.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pyfront import __version__
from pyfront.ast.nodes import ASTNode
from pyfront.diagnostics import Diagnostic
from pyfront.lexer.lexer import Lexer
from pyfront.lexer.tokens import Token
from pyfront.parser.parser import Parser

logger = logging.getLogger(__name__)

LANGUAGE = "python"
SOURCE_FIELD = "sourceCode"


@dataclass(frozen=True)
class Analysis:
    """Result of running the lexer and parser over one source text."""

    tokens: list[Token]
    ast: ASTNode | None
    lexical_errors: list[Diagnostic]
    syntax_errors: list[Diagnostic]

    @property
    def total_errors(self) -> int:
        return len(self.lexical_errors) + len(self.syntax_errors)

    @property
    def has_errors(self) -> bool:
        return self.total_errors > 0

    def to_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "language": LANGUAGE,
            "tokens": [tok.to_dict() for tok in self.tokens],
            "ast": self.ast.to_dict() if self.ast is not None else None,
            "lexicalErrors": [d.to_dict() for d in self.lexical_errors],
            "syntaxErrors": [d.to_dict() for d in self.syntax_errors],
            "totalTokens": len(self.tokens),
            "totalErrors": self.total_errors,
            "hasErrors": self.has_errors,
        }


def analyze(source: str) -> Analysis:
    """Tokenize and parse `source`, keeping the two diagnostic channels apart."""
    lexed = Lexer(source).tokenize()
    parsed = Parser(lexed.tokens).parse()
    return Analysis(
        tokens=lexed.tokens,
        ast=parsed.ast,
        lexical_errors=[Diagnostic.from_error_token(tok) for tok in lexed.errors],
        syntax_errors=parsed.errors,
    )


def handle_request(payload: Any) -> tuple[int, dict[str, Any]]:
    """Map a request payload to an HTTP-style ``(status, body)`` pair."""
    source = payload.get(SOURCE_FIELD) if isinstance(payload, Mapping) else None
    if source is None or source == "":
        return 400, {"error": f"The {SOURCE_FIELD} field is required"}
    if not isinstance(source, str):
        return 400, {"error": f"The {SOURCE_FIELD} field must be a string"}

    try:
        analysis = analyze(source)
    except Exception as e:
        logger.exception("analysis failed")
        return 500, {"error": "Internal server error", "message": str(e)}

    logger.debug(
        "analyzed %d characters: %d tokens, %d error(s)",
        len(source), len(analysis.tokens), analysis.total_errors,
    )
    return 200, analysis.to_response()


def health() -> dict[str, Any]:
    """Static capability metadata."""
    return {
        "status": "OK",
        "message": "Python analyzer backend is running",
        "language": LANGUAGE,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
