from pyfront.ast.nodes import ASTNode, NodeType

__all__ = ["ASTNode", "NodeType"]
