"""Immutable syntax tree nodes.

The tree is deliberately generic: every node is an `ASTNode` tagged with a
`NodeType`. Leaves keep their literal source text verbatim (no numeric or
string conversion) plus a back-reference to the token that produced them.
Nodes are never mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pyfront.lexer.tokens import Token, TokenType


class NodeType(Enum):
    """Node tags. Values are the wire tags consumers match on."""

    PROGRAM = "Program"
    ASSIGNMENT = "Assignment"
    IDENTIFIER = "Identifier"
    INTEGER_LITERAL = "IntegerLiteral"
    FLOAT_LITERAL = "FloatLiteral"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    NONE_LITERAL = "NoneLiteral"


# Leaf tag for each token type a primary expression accepts.
LEAF_NODE_TYPES: dict[TokenType, NodeType] = {
    TokenType.IDENTIFIER: NodeType.IDENTIFIER,
    TokenType.INTEGER: NodeType.INTEGER_LITERAL,
    TokenType.FLOAT: NodeType.FLOAT_LITERAL,
    TokenType.STRING: NodeType.STRING_LITERAL,
    TokenType.BOOLEAN: NodeType.BOOLEAN_LITERAL,
    TokenType.NONE: NodeType.NONE_LITERAL,
}


@dataclass(frozen=True)
class ASTNode:
    """A syntax tree node.

    `children` is ordered: for a Program it is the statements in source
    order, for an Assignment the single right-hand-side expression.
    """

    type: NodeType
    value: str | None = None
    children: tuple[ASTNode, ...] = ()
    token: Token | None = None

    @classmethod
    def leaf(cls, token: Token) -> ASTNode:
        return cls(LEAF_NODE_TYPES[token.type], value=token.value, token=token)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value}
        if self.value is not None:
            data["value"] = self.value
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.token is not None:
            data["token"] = self.token.to_dict()
        return data

    def pretty(self, indent: int = 0) -> str:
        """Render the subtree one node per line, children indented."""
        pad = "  " * indent
        head = f"{pad}{self.type.value}"
        if self.value is not None:
            head += f" {self.value!r}"
        if self.token is not None:
            head += f" @{self.token.line}:{self.token.column}"
        lines = [head]
        lines.extend(child.pretty(indent + 1) for child in self.children)
        return "\n".join(lines)
