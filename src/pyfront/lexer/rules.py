"""The lexer's fixed-priority rule table.

Each rule pairs a matcher with the token type it produces. A matcher is a
plain callable ``(source, pos) -> int`` returning the length of the prefix
it accepts at ``pos`` (0 means no match). The lexer walks `RULES` in order
and the first non-zero match wins, so the order of this table is part of
the lexical grammar:

- compound assignments come before arithmetic, bitwise and ``=``;
- ``->`` comes before arithmetic ``-``;
- ``**`` and ``//`` come before ``*`` and ``/``;
- shifts come before comparisons, and ``==`` before ``=``;
- floats come before integers, and the radix integers before decimal.

String matchers also accept unterminated strings (up to the end of the line,
or the end of input for triple quotes) so the lexer can report them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from pyfront.lexer.tokens import TokenType

Matcher = Callable[[str, int], int]


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    matcher: Matcher
    token_type: TokenType


# ---------------------------------------------------------------------------
# Matcher factories
# ---------------------------------------------------------------------------

def _literal(*options: str) -> Matcher:
    """Match one of several fixed strings, longest first."""
    ordered = sorted(options, key=len, reverse=True)

    def match(source: str, pos: int) -> int:
        for option in ordered:
            if source.startswith(option, pos):
                return len(option)
        return 0

    return match


def _word(*words: str) -> Matcher:
    """Match one of several alphabetic operators on a whole-word boundary."""
    ordered = sorted(words, key=len, reverse=True)

    def match(source: str, pos: int) -> int:
        for word in ordered:
            end = pos + len(word)
            if source.startswith(word, pos) and not (
                end < len(source) and _is_word_char(source[end])
            ):
                return len(word)
        return 0

    return match


def _pattern(regex: str) -> Matcher:
    compiled = re.compile(regex)

    def match(source: str, pos: int) -> int:
        m = compiled.match(source, pos)
        return m.end() - pos if m else 0

    return match


def _is_word_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


# ---------------------------------------------------------------------------
# Hand-written matchers
# ---------------------------------------------------------------------------

def match_whitespace(source: str, pos: int) -> int:
    end = pos
    while end < len(source) and source[end] in " \t":
        end += 1
    return end - pos


def match_newline(source: str, pos: int) -> int:
    if source.startswith("\r\n", pos):
        return 2
    if source.startswith("\n", pos):
        return 1
    return 0


def match_comment(source: str, pos: int) -> int:
    """Match from # to the end of the line (newline excluded)."""
    if not source.startswith("#", pos):
        return 0
    end = pos
    while end < len(source) and source[end] not in "\r\n":
        end += 1
    return end - pos


def match_triple_string(source: str, pos: int) -> int:
    """Match a triple-quoted string, or an unterminated one up to end of input."""
    delimiter = source[pos:pos + 3]
    if delimiter not in ('"""', "'''"):
        return 0
    end = pos + 3
    while end < len(source):
        if source[end] == "\\":
            end += 2
            continue
        if source.startswith(delimiter, end):
            return end + 3 - pos
        end += 1
    return len(source) - pos


def match_quoted_string(source: str, pos: int) -> int:
    """Match a single-line quoted string, or an unterminated one up to end of line."""
    if pos >= len(source) or source[pos] not in "'\"":
        return 0
    quote = source[pos]
    end = pos + 1
    while end < len(source) and source[end] not in "\r\n":
        ch = source[end]
        if ch == "\\":
            # An escape never swallows the line break.
            if end + 1 < len(source) and source[end + 1] not in "\r\n":
                end += 2
            else:
                end += 1
            continue
        end += 1
        if ch == quote:
            break
    return end - pos


def match_identifier(source: str, pos: int) -> int:
    if pos >= len(source):
        return 0
    first = source[pos]
    if not (first == "_" or (first.isascii() and first.isalpha())):
        return 0
    end = pos + 1
    while end < len(source) and _is_word_char(source[end]):
        end += 1
    return end - pos


# ---------------------------------------------------------------------------
# The table
# ---------------------------------------------------------------------------

RULES: tuple[Rule, ...] = (
    Rule("whitespace", match_whitespace, TokenType.WHITESPACE),
    Rule("newline", match_newline, TokenType.NEWLINE),
    Rule("comment", match_comment, TokenType.COMMENT),
    Rule("triple_string", match_triple_string, TokenType.STRING),
    Rule("string", match_quoted_string, TokenType.STRING),
    Rule("float_decimal", _pattern(r"\d+\.\d+(?:[eE][-+]?\d+)?"), TokenType.FLOAT),
    Rule("float_exponent", _pattern(r"\d+[eE][-+]?\d+"), TokenType.FLOAT),
    Rule("integer_binary", _pattern(r"0[bB][01]+"), TokenType.INTEGER),
    Rule("integer_octal", _pattern(r"0[oO][0-7]+"), TokenType.INTEGER),
    Rule("integer_hex", _pattern(r"0[xX][0-9a-fA-F]+"), TokenType.INTEGER),
    Rule("integer_decimal", _pattern(r"\d+"), TokenType.INTEGER),
    Rule(
        "compound_assignment",
        _literal("**=", "//=", "<<=", ">>=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^="),
        TokenType.ASSIGNMENT_OPERATOR,
    ),
    Rule("arrow", _literal("->"), TokenType.ARROW),
    Rule("arithmetic", _literal("**", "//", "+", "-", "*", "%"), TokenType.ARITHMETIC_OPERATOR),
    Rule("bitwise", _literal("<<", ">>", "&", "|", "^", "~"), TokenType.BITWISE_OPERATOR),
    Rule("comparison", _literal("==", "!=", "<=", ">=", "<", ">"), TokenType.COMPARISON_OPERATOR),
    Rule("logical", _word("and", "or", "not"), TokenType.LOGICAL_OPERATOR),
    Rule("identity", _word("is"), TokenType.IDENTITY_OPERATOR),
    Rule("membership", _word("in"), TokenType.MEMBERSHIP_OPERATOR),
    Rule("assignment", _literal("="), TokenType.ASSIGNMENT_OPERATOR),
    Rule("division", _literal("/"), TokenType.ARITHMETIC_OPERATOR),
    Rule("lparen", _literal("("), TokenType.LPAREN),
    Rule("rparen", _literal(")"), TokenType.RPAREN),
    Rule("lbracket", _literal("["), TokenType.LBRACKET),
    Rule("rbracket", _literal("]"), TokenType.RBRACKET),
    Rule("lbrace", _literal("{"), TokenType.LBRACE),
    Rule("rbrace", _literal("}"), TokenType.RBRACE),
    Rule("comma", _literal(","), TokenType.COMMA),
    Rule("colon", _literal(":"), TokenType.COLON),
    Rule("semicolon", _literal(";"), TokenType.SEMICOLON),
    Rule("dot", _literal("."), TokenType.DOT),
    Rule("identifier", match_identifier, TokenType.IDENTIFIER),
)
