"""Recursive descent parser with panic-mode error recovery.

Transforms the lexer's token stream into a `Program` tree of top-level
statements. Malformed spans are reported and skipped; parsing always runs to
the end of the stream and returns whatever statements it could derive.

Grammar reference (simplified EBNF):

    program     ::= (NEWLINE* statement NEWLINE*)* EOF
    statement   ::= assignment | expression
    assignment  ::= IDENTIFIER ASSIGNMENT_OPERATOR primary
    expression  ::= primary
    primary     ::= IDENTIFIER | INTEGER | FLOAT | STRING | BOOLEAN | NONE

Statement derivation reports hard failures by returning `Failed` rather
than raising; the top-level loop then resynchronizes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pyfront.ast.nodes import ASTNode, NodeType
from pyfront.diagnostics import DEFAULT_SUGGESTION, Diagnostic
from pyfront.lexer.tokens import LITERAL_TYPES, RESERVED_WORDS, TRIVIA_TYPES, Token, TokenType

logger = logging.getLogger(__name__)

_IDENTIFIER_SHAPE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


# ---------------------------------------------------------------------------
# Derivation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Derived:
    """Derivation succeeded. `node` is None when nothing was produced."""

    node: ASTNode | None


@dataclass(frozen=True, slots=True)
class Failed:
    """Derivation hit a hard failure; the diagnostic is already recorded."""

    diagnostic: Diagnostic


DerivationResult = Derived | Failed


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Output of one parse. `ast` is None iff no statement was derived."""

    ast: ASTNode | None
    errors: list[Diagnostic]


# ---------------------------------------------------------------------------
# Identifier validation
# ---------------------------------------------------------------------------

def validate_identifier(text: str) -> tuple[str, str, str] | None:
    """Check an identifier's shape. Returns (code, message, suggestion) or None.

    Checks run in order and the first hit wins: digit start, reserved word,
    then any character outside ``[A-Za-z0-9_]``.
    """
    if text[:1].isdigit():
        return (
            "P006",
            f"Invalid identifier '{text}': identifier cannot start with a digit",
            "Start identifiers with a letter or _",
        )
    if text in RESERVED_WORDS:
        return (
            "P007",
            f"Reserved word used as identifier: '{text}'",
            "Choose a name that is not a Python reserved word",
        )
    if not _IDENTIFIER_SHAPE.fullmatch(text):
        return (
            "P008",
            f"Invalid characters in identifier: '{text}'",
            "Use only letters, digits and _ in identifiers",
        )
    return None


class Parser:
    """Recursive descent parser for single-line assignments and expressions.

    Usage::

        from pyfront.lexer import Lexer
        from pyfront.parser import Parser

        tokens = Lexer(source).tokenize().tokens
        result = Parser(tokens).parse()
        result.ast      # Program node, or None
        result.errors   # syntactic diagnostics
    """

    def __init__(self, tokens: list[Token]) -> None:
        # Trivia is dropped up front; ERROR tokens stay so they can be
        # reported in statement position.
        self.tokens = [tok for tok in tokens if tok.type not in TRIVIA_TYPES]
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(Token(
                TokenType.EOF, "EOF",
                last.line if last else 1,
                last.column + len(last.value) if last else 1,
            ))
        self.pos = 0
        self.errors: list[Diagnostic] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self) -> ParseResult:
        """Parse the entire token stream into a Program node."""
        self.pos = 0
        self.errors = []
        statements: list[ASTNode] = []

        while not self._at_end():
            self._skip_newlines()
            if self._at_end():
                break

            result = self._parse_statement()
            if isinstance(result, Failed):
                self._synchronize()
                continue
            if result.node is not None:
                statements.append(result.node)
            self._skip_newlines()

        logger.debug(
            "parsed %d statement(s) with %d syntax error(s)",
            len(statements), len(self.errors),
        )
        program = ASTNode(NodeType.PROGRAM, children=tuple(statements)) if statements else None
        return ParseResult(ast=program, errors=list(self.errors))

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _parse_statement(self) -> DerivationResult:
        token = self._current()

        if token.type is TokenType.ERROR:
            detail = token.error
            self._report(
                token,
                "P001",
                f"Lexical error: {detail.message if detail else 'Unrecognized character'}",
                detail.suggestion if detail else "Check the character at this position",
            )
            self._advance()
            return Derived(None)

        if self._check(TokenType.IDENTIFIER) and self._peek_type(1) is TokenType.ASSIGNMENT_OPERATOR:
            return self._parse_assignment()

        if token.type in LITERAL_TYPES:
            return self._parse_expression_statement()

        if token.type is TokenType.KEYWORD:
            return self._fail(
                token,
                "P002",
                f"Keyword '{token.value}' used incorrectly in this context",
                "Keywords cannot be used as identifiers or start a statement here",
            )

        return self._fail(
            token,
            "P004",
            f"Expected a declaration or expression, got {token.type.value} {token.value!r}",
        )

    def _parse_assignment(self) -> DerivationResult:
        name = self._advance()
        self._check_identifier(name)

        # _parse_statement only routes here with the operator as the next token.
        self._advance()

        value = self._parse_primary()
        if isinstance(value, Failed):
            return value
        return Derived(ASTNode(
            NodeType.ASSIGNMENT,
            value=name.value,
            children=(value.node,),
            token=name,
        ))

    def _parse_expression_statement(self) -> DerivationResult:
        if self._check(TokenType.IDENTIFIER):
            self._check_identifier(self._current())

        expr = self._parse_primary(validated=True)
        if isinstance(expr, Failed):
            return expr

        if self._check(TokenType.ASSIGNMENT_OPERATOR):
            return self._fail(
                self._current(),
                "P003",
                "Cannot assign to a literal",
                "The left-hand side of = must be a valid identifier",
            )
        return expr

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_primary(self, validated: bool = False) -> DerivationResult:
        token = self._current()
        if token.type not in LITERAL_TYPES:
            return self._fail(
                token,
                "P005",
                "Expected a valid expression",
                "Provide an identifier or a literal (number, string, True, False, None)",
            )
        self._advance()
        if token.type is TokenType.IDENTIFIER and not validated:
            self._check_identifier(token)
        return Derived(ASTNode.leaf(token))

    # ------------------------------------------------------------------
    # Diagnostics and recovery
    # ------------------------------------------------------------------

    def _check_identifier(self, token: Token) -> None:
        """Record an identifier-shape problem without interrupting derivation."""
        problem = validate_identifier(token.value)
        if problem is not None:
            self._report(token, *problem)

    def _report(self, token: Token, code: str, message: str, suggestion: str = DEFAULT_SUGGESTION) -> Diagnostic:
        diagnostic = Diagnostic.at(token, code, message, suggestion)
        self.errors.append(diagnostic)
        return diagnostic

    def _fail(self, token: Token, code: str, message: str, suggestion: str = DEFAULT_SUGGESTION) -> Failed:
        return Failed(self._report(token, code, message, suggestion))

    def _synchronize(self) -> None:
        """Panic mode: discard tokens until a safe statement boundary."""
        start = self._current()
        self._advance()

        while not self._at_end():
            if self._previous().type is TokenType.NEWLINE:
                break
            if self._check(TokenType.ERROR):
                self._advance()
                continue
            if self._check(TokenType.IDENTIFIER) and self._peek_type(1) is TokenType.ASSIGNMENT_OPERATOR:
                break
            if self._current().type in LITERAL_TYPES:
                break
            self._advance()

        logger.debug(
            "recovered from %d:%d, resuming at %d:%d",
            start.line, start.column, self._current().line, self._current().column,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[max(self.pos - 1, 0)]

    def _advance(self) -> Token:
        """Consume and return the current token. Never moves past EOF."""
        token = self.tokens[self.pos]
        if not self._at_end():
            self.pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type is token_type

    def _peek_type(self, offset: int) -> TokenType | None:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx].type

    def _at_end(self) -> bool:
        return self._current().type is TokenType.EOF

    def _skip_newlines(self) -> None:
        while self._check(TokenType.NEWLINE):
            self._advance()
