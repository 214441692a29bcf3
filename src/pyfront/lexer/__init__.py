"""pyfront lexer: table-driven tokenizer with lexical-error tokens."""

from pyfront.lexer.tokens import LexicalErrorDetail, Token, TokenType
from pyfront.lexer.lexer import Lexer, LexResult

__all__ = ["LexicalErrorDetail", "Token", "TokenType", "Lexer", "LexResult"]
