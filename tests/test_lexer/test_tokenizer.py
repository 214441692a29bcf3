"""Tests for the table-driven lexer."""

import pytest

from pyfront.lexer.lexer import Lexer
from pyfront.lexer.rules import RULES
from pyfront.lexer.tokens import KEYWORDS, RESERVED_WORDS, TokenType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def token_types(source: str) -> list[TokenType]:
    """Return the token types, excluding the trailing EOF."""
    tokens = Lexer(source).tokenize().tokens
    return [t.type for t in tokens if t.type is not TokenType.EOF]


def token_values(source: str) -> list[tuple[TokenType, str]]:
    """Return (type, value) pairs, excluding the trailing EOF."""
    tokens = Lexer(source).tokenize().tokens
    return [(t.type, t.value) for t in tokens if t.type is not TokenType.EOF]


# ---------------------------------------------------------------------------
# Basic token recognition
# ---------------------------------------------------------------------------

class TestBasicTokens:
    def test_empty_source(self):
        result = Lexer("").tokenize()
        assert len(result.tokens) == 1
        eof = result.tokens[0]
        assert eof.type == TokenType.EOF
        assert eof.value == "EOF"
        assert (eof.line, eof.column) == (1, 1)
        assert result.errors == []

    def test_whitespace_yields_no_tokens(self):
        result = Lexer("  \t ").tokenize()
        assert [t.type for t in result.tokens] == [TokenType.EOF]
        assert result.tokens[0].column == 5

    def test_newlines_are_tokens(self):
        assert token_types("a\n\nb") == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
        ]

    def test_crlf_is_one_newline(self):
        assert token_values("a\r\nb") == [
            (TokenType.IDENTIFIER, "a"),
            (TokenType.NEWLINE, "\r\n"),
            (TokenType.IDENTIFIER, "b"),
        ]

    def test_comment(self):
        assert token_values("x # note\ny") == [
            (TokenType.IDENTIFIER, "x"),
            (TokenType.COMMENT, "# note"),
            (TokenType.NEWLINE, "\n"),
            (TokenType.IDENTIFIER, "y"),
        ]

    def test_identifier(self):
        assert token_values("my_Variable2 _private") == [
            (TokenType.IDENTIFIER, "my_Variable2"),
            (TokenType.IDENTIFIER, "_private"),
        ]

    def test_eof_is_always_last_and_unique(self):
        tokens = Lexer("x = 1\n").tokenize().tokens
        assert tokens[-1].type == TokenType.EOF
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1


# ---------------------------------------------------------------------------
# Reclassification of words
# ---------------------------------------------------------------------------

class TestWordClassification:
    def test_booleans(self):
        assert token_values("True False") == [
            (TokenType.BOOLEAN, "True"),
            (TokenType.BOOLEAN, "False"),
        ]

    def test_none(self):
        assert token_types("None") == [TokenType.NONE]

    def test_keywords(self):
        assert token_types("if while class def return") == [TokenType.KEYWORD] * 5

    def test_case_matters(self):
        assert token_types("true none If") == [TokenType.IDENTIFIER] * 3

    def test_reserved_word_tables(self):
        assert len(RESERVED_WORDS) == 35
        assert "True" not in KEYWORDS
        assert "None" not in KEYWORDS

    def test_word_operators(self):
        assert token_types("and or not is in") == [
            TokenType.LOGICAL_OPERATOR,
            TokenType.LOGICAL_OPERATOR,
            TokenType.LOGICAL_OPERATOR,
            TokenType.IDENTITY_OPERATOR,
            TokenType.MEMBERSHIP_OPERATOR,
        ]

    def test_word_operators_need_a_word_boundary(self):
        assert token_values("index order island notable android") == [
            (TokenType.IDENTIFIER, "index"),
            (TokenType.IDENTIFIER, "order"),
            (TokenType.IDENTIFIER, "island"),
            (TokenType.IDENTIFIER, "notable"),
            (TokenType.IDENTIFIER, "android"),
        ]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_floats(self):
        assert token_values("3.14 1e10 2.5E-3 7e+2") == [
            (TokenType.FLOAT, "3.14"),
            (TokenType.FLOAT, "1e10"),
            (TokenType.FLOAT, "2.5E-3"),
            (TokenType.FLOAT, "7e+2"),
        ]

    def test_integer_radixes(self):
        assert token_values("0b101 0o17 0xFF 42") == [
            (TokenType.INTEGER, "0b101"),
            (TokenType.INTEGER, "0o17"),
            (TokenType.INTEGER, "0xFF"),
            (TokenType.INTEGER, "42"),
        ]

    def test_digit_then_letters_splits(self):
        assert token_values("2x") == [
            (TokenType.INTEGER, "2"),
            (TokenType.IDENTIFIER, "x"),
        ]

    def test_trailing_dot_is_not_a_float(self):
        assert token_values("1.") == [
            (TokenType.INTEGER, "1"),
            (TokenType.DOT, "."),
        ]


# ---------------------------------------------------------------------------
# Operators and punctuation
# ---------------------------------------------------------------------------

class TestOperators:
    def test_power_assignment_beats_shorter_forms(self):
        assert token_values("**= *= ** *") == [
            (TokenType.ASSIGNMENT_OPERATOR, "**="),
            (TokenType.ASSIGNMENT_OPERATOR, "*="),
            (TokenType.ARITHMETIC_OPERATOR, "**"),
            (TokenType.ARITHMETIC_OPERATOR, "*"),
        ]

    def test_floor_division_and_division(self):
        assert token_values("//= // /= /") == [
            (TokenType.ASSIGNMENT_OPERATOR, "//="),
            (TokenType.ARITHMETIC_OPERATOR, "//"),
            (TokenType.ASSIGNMENT_OPERATOR, "/="),
            (TokenType.ARITHMETIC_OPERATOR, "/"),
        ]

    def test_arrow_beats_minus(self):
        assert token_values("-> - -=") == [
            (TokenType.ARROW, "->"),
            (TokenType.ARITHMETIC_OPERATOR, "-"),
            (TokenType.ASSIGNMENT_OPERATOR, "-="),
        ]

    def test_equality_beats_assignment(self):
        assert token_values("== = !=") == [
            (TokenType.COMPARISON_OPERATOR, "=="),
            (TokenType.ASSIGNMENT_OPERATOR, "="),
            (TokenType.COMPARISON_OPERATOR, "!="),
        ]

    def test_shifts_and_comparisons(self):
        assert token_values("<<= << <= < >>= >> >= >") == [
            (TokenType.ASSIGNMENT_OPERATOR, "<<="),
            (TokenType.BITWISE_OPERATOR, "<<"),
            (TokenType.COMPARISON_OPERATOR, "<="),
            (TokenType.COMPARISON_OPERATOR, "<"),
            (TokenType.ASSIGNMENT_OPERATOR, ">>="),
            (TokenType.BITWISE_OPERATOR, ">>"),
            (TokenType.COMPARISON_OPERATOR, ">="),
            (TokenType.COMPARISON_OPERATOR, ">"),
        ]

    def test_bitwise(self):
        assert token_types("& | ^ ~") == [TokenType.BITWISE_OPERATOR] * 4

    def test_no_spaces_needed(self):
        assert token_values("x=-1") == [
            (TokenType.IDENTIFIER, "x"),
            (TokenType.ASSIGNMENT_OPERATOR, "="),
            (TokenType.ARITHMETIC_OPERATOR, "-"),
            (TokenType.INTEGER, "1"),
        ]

    def test_symbols(self):
        assert token_types("()[]{},:;.") == [
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.SEMICOLON,
            TokenType.DOT,
        ]

    def test_rule_table_priorities(self):
        names = [rule.name for rule in RULES]
        assert names.index("compound_assignment") < names.index("arithmetic")
        assert names.index("arrow") < names.index("arithmetic")
        assert names.index("comparison") < names.index("assignment")
        assert names.index("float_decimal") < names.index("integer_decimal")
        assert names[-1] == "identifier"


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

class TestStrings:
    def test_single_and_double_quoted(self):
        assert token_values("'hi' \"there\"") == [
            (TokenType.STRING, "'hi'"),
            (TokenType.STRING, '"there"'),
        ]

    def test_value_is_verbatim(self):
        assert token_values(r"'a\nb'") == [(TokenType.STRING, r"'a\nb'")]

    def test_all_valid_escapes(self):
        result = Lexer(r"""'\"\'\\\n\t\r\b\f\v\0'""").tokenize()
        assert result.errors == []
        assert result.tokens[0].type == TokenType.STRING

    def test_escaped_quote_does_not_close(self):
        assert token_values(r"'it\'s'") == [(TokenType.STRING, r"'it\'s'")]

    def test_triple_quoted_spans_lines(self):
        result = Lexer('"""first\nsecond""" x').tokenize()
        assert result.errors == []
        string, ident = result.tokens[0], result.tokens[1]
        assert string.type == TokenType.STRING
        assert string.value == '"""first\nsecond"""'
        assert (string.line, string.column) == (1, 1)
        assert (ident.line, ident.column) == (2, 11)

    def test_triple_quoted_skips_escape_check(self):
        result = Lexer("'''C:\\path'''").tokenize()
        assert result.errors == []

    def test_empty_strings(self):
        assert token_types("'' \"\"") == [TokenType.STRING, TokenType.STRING]


# ---------------------------------------------------------------------------
# Lexical errors
# ---------------------------------------------------------------------------

class TestLexicalErrors:
    def test_unterminated_string(self):
        result = Lexer("'hello").tokenize()
        assert [t.type for t in result.tokens] == [TokenType.ERROR, TokenType.EOF]
        assert len(result.errors) == 1
        err = result.errors[0]
        assert err.value == "'hello"
        assert err.error.code == "L002"
        assert "Unterminated string" in err.error.message

    def test_unterminated_string_stops_at_line_end(self):
        assert token_types("'abc\nx") == [
            TokenType.ERROR,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
        ]

    def test_mismatched_quotes(self):
        result = Lexer("\"abc'").tokenize()
        assert len(result.errors) == 1
        assert result.errors[0].error.code == "L002"

    def test_unterminated_triple_quoted(self):
        result = Lexer('x = """never\nclosed').tokenize()
        assert len(result.errors) == 1
        assert result.errors[0].value == '"""never\nclosed'
        assert result.errors[0].error.code == "L002"

    def test_invalid_escape(self):
        result = Lexer(r"'a\qb'").tokenize()
        assert len(result.errors) == 1
        err = result.errors[0]
        assert err.type == TokenType.ERROR
        assert err.value == r"'a\qb'"
        assert err.error.code == "L003"
        assert r"\q" in err.error.message

    def test_bell_escape_is_rejected(self):
        result = Lexer(r"'\a'").tokenize()
        assert result.errors[0].error.code == "L003"

    def test_unrecognized_character(self):
        result = Lexer("x = $").tokenize()
        assert len(result.errors) == 1
        err = result.errors[0]
        assert err.value == "$"
        assert (err.line, err.column) == (1, 5)
        assert err.error.code == "L001"
        assert err.error.suggestion

    def test_each_bad_character_is_its_own_error(self):
        result = Lexer("@!?").tokenize()
        assert [e.value for e in result.errors] == ["@", "!", "?"]

    def test_error_tokens_stay_in_the_stream(self):
        result = Lexer("a $ b").tokenize()
        assert [t.type for t in result.tokens] == [
            TokenType.IDENTIFIER,
            TokenType.ERROR,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]
        assert result.tokens[1] is result.errors[0]

    def test_scan_continues_after_errors(self):
        result = Lexer("$ x = 1").tokenize()
        assert token_types("$ x = 1")[1:] == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGNMENT_OPERATOR,
            TokenType.INTEGER,
        ]
        assert len(result.errors) == 1

    def test_error_to_dict(self):
        err = Lexer("$").tokenize().errors[0]
        data = err.to_dict()
        assert data["type"] == "ERROR"
        assert data["value"] == "$"
        assert set(data["error"]) == {"message", "suggestion"}


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

class TestPositions:
    def test_columns_within_a_line(self):
        tokens = Lexer("x = 42").tokenize().tokens
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 3), (1, 5), (1, 7)]

    def test_lines_reset_column(self):
        tokens = Lexer("x = 1\n  y = 22").tokenize().tokens
        y = next(t for t in tokens if t.value == "y")
        num = next(t for t in tokens if t.value == "22")
        assert (y.line, y.column) == (2, 3)
        assert (num.line, num.column) == (2, 7)

    def test_newline_token_position(self):
        tokens = Lexer("ab\n").tokenize().tokens
        assert (tokens[1].type, tokens[1].line, tokens[1].column) == (TokenType.NEWLINE, 1, 3)
        assert (tokens[2].type, tokens[2].line, tokens[2].column) == (TokenType.EOF, 2, 1)

    def test_tabs_count_as_one_column(self):
        tokens = Lexer("\tx").tokenize().tokens
        assert tokens[0].column == 2


# ---------------------------------------------------------------------------
# Whole-scan properties
# ---------------------------------------------------------------------------

MESSY_SOURCE = (
    "x = 1  # set x\n"
    "\ty='it\\'s' ; $\r\n"
    '"""doc\nstring"""\n'
    "z **= 0xFF -> 'open\n"
    "   \n"
)


class TestScanProperties:
    def test_idempotent_across_instances(self):
        assert Lexer(MESSY_SOURCE).tokenize() == Lexer(MESSY_SOURCE).tokenize()

    def test_idempotent_on_same_instance(self):
        lexer = Lexer(MESSY_SOURCE)
        first = lexer.tokenize()
        second = lexer.tokenize()
        assert first == second

    @pytest.mark.parametrize("source", ["", "x", MESSY_SOURCE, "@@ 'a\\qb' \n\n"])
    def test_spans_reconstruct_source(self, source):
        assert "".join(t.value for t in Lexer(source).scan()) == source

    def test_tokenize_drops_only_whitespace(self):
        scanned = [t for t in Lexer(MESSY_SOURCE).scan() if t.type != TokenType.WHITESPACE]
        tokens = Lexer(MESSY_SOURCE).tokenize().tokens
        assert tokens[:-1] == scanned
