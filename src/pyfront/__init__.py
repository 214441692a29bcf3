"""pyfront: lexer and error-recovering parser for a restricted Python subset."""

__version__ = "0.1.0"
