"""pyfront parser: recursive descent with panic-mode recovery."""

from pyfront.parser.parser import Derived, Failed, ParseResult, Parser, validate_identifier

__all__ = ["Derived", "Failed", "ParseResult", "Parser", "validate_identifier"]
