"""Table-driven tokenizer with embedded lexical-error detection.

Design decisions:
- Rules are tried strictly in the order of `pyfront.lexer.rules.RULES`;
  the first rule matching a non-empty prefix wins.
- Lexical problems never abort the scan. They become ERROR tokens that
  appear both in the token stream and in the separate error list.
- Whitespace is matched but not tokenized; newlines and comments are.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from pyfront.lexer.rules import RULES, Rule
from pyfront.lexer.tokens import LexicalErrorDetail, Token, TokenType, classify_word

logger = logging.getLogger(__name__)

VALID_ESCAPES = frozenset({'"', "'", "\\", "n", "t", "r", "b", "f", "v", "0"})


@dataclass(frozen=True, slots=True)
class LexResult:
    """Output of one scan: every token (EOF last) and the error tokens among them."""

    tokens: list[Token]
    errors: list[Token]


class Lexer:
    """Tokenizes source text into a stream of `Token` objects.

    Usage::

        result = Lexer(source_text).tokenize()
        result.tokens   # ends with an EOF token
        result.errors   # ERROR tokens, in source order
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.errors: list[Token] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> LexResult:
        """Tokenize the entire source, appending a single EOF token."""
        tokens = [tok for tok in self.scan() if tok.type is not TokenType.WHITESPACE]
        tokens.append(Token(TokenType.EOF, "EOF", self.line, self.column))
        logger.debug(
            "tokenized %d characters into %d tokens (%d lexical errors)",
            len(self.source), len(tokens), len(self.errors),
        )
        return LexResult(tokens=tokens, errors=list(self.errors))

    def scan(self) -> Iterator[Token]:
        """Yield every lexeme in source order, WHITESPACE included, without EOF.

        The values of the yielded tokens concatenate back to the source.
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self.errors = []

        while self.pos < len(self.source):
            yield self._next_token()

    # ------------------------------------------------------------------
    # Token scanning
    # ------------------------------------------------------------------

    def _next_token(self) -> Token:
        for rule in RULES:
            length = rule.matcher(self.source, self.pos)
            if length > 0:
                return self._consume(rule, self.source[self.pos:self.pos + length])

        ch = self.source[self.pos]
        return self._error(
            ch,
            "L001",
            f"Unrecognized character: {ch!r}",
            "Valid characters are letters, digits, operators (+, -, *, /, ...) and symbols",
        )

    def _consume(self, rule: Rule, text: str) -> Token:
        """Turn the text matched by `rule` into a token and advance past it."""
        token_type = rule.token_type

        if token_type is TokenType.STRING:
            problem = _validate_string(text)
            if problem is not None:
                return self._error(text, *problem)
        elif token_type is TokenType.IDENTIFIER:
            token_type = classify_word(text)

        token = Token(token_type, text, self.line, self.column)
        self._advance(len(text))
        return token

    def _error(self, text: str, code: str, message: str, suggestion: str) -> Token:
        token = Token(
            TokenType.ERROR, text, self.line, self.column,
            error=LexicalErrorDetail(code, message, suggestion),
        )
        self.errors.append(token)
        self._advance(len(text))
        return token

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _advance(self, count: int) -> None:
        """Consume `count` characters, keeping line/column exact."""
        for _ in range(count):
            if self.source[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1


def _validate_string(text: str) -> tuple[str, str, str] | None:
    """Return (code, message, suggestion) if a matched string literal is malformed."""
    if text[:3] in ('"""', "'''"):
        delimiter = text[:3]
        if len(text) < 6 or not text.endswith(delimiter):
            return (
                "L002",
                "Unterminated string: triple-quoted string is never closed",
                f"Close the string with {delimiter}",
            )
        return None

    quote = text[0]
    i = 1
    closed = False
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == quote:
            closed = i == len(text) - 1
            break
        i += 1
    if not closed:
        return (
            "L002",
            "Unterminated string: string is not closed on the same line",
            "Close the string with the same quote character used to open it",
        )

    i = 1
    while i < len(text) - 1:
        if text[i] == "\\":
            escaped = text[i + 1]
            if escaped not in VALID_ESCAPES:
                return (
                    "L003",
                    f"Invalid escape sequence: \\{escaped}",
                    "Valid escape sequences are \\\", \\', \\\\, \\n, \\t, \\r, \\b, \\f, \\v and \\0",
                )
            i += 2
            continue
        i += 1
    return None
