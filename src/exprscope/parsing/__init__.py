"""
Expression parsing components.

This package provides the parser adapter and the syntax node variants it
produces for expression field content.
"""

from exprscope.parsing.nodes import (
    ArrayExpression,
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    FunctionExpression,
    Identifier,
    Literal,
    LogicalExpression,
    MemberExpression,
    ObjectExpression,
    OtherNode,
    Property,
    SyntaxNode,
    UnaryExpression,
)
from exprscope.parsing.parser import parse_expression

__all__ = [
    "ArrayExpression",
    "BinaryExpression",
    "CallExpression",
    "ConditionalExpression",
    "FunctionExpression",
    "Identifier",
    "Literal",
    "LogicalExpression",
    "MemberExpression",
    "ObjectExpression",
    "OtherNode",
    "Property",
    "SyntaxNode",
    "UnaryExpression",
    "parse_expression",
]
