"""
Free variable analysis for expression syntax trees.

Walks a parsed expression without evaluating it and reports the names it
reads from external data. Built-in globals, render context variables,
function parameters and non-computed property names are not reported.
"""

import logging

from exprscope.analysis.builtins import BUILT_IN_VARIABLES, is_builtin
from exprscope.exceptions import ErrorLevel, ExpressionParseError
from exprscope.parsing import (
    ArrayExpression,
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    FunctionExpression,
    Identifier,
    Literal,
    MemberExpression,
    ObjectExpression,
    OtherNode,
    Property,
    SyntaxNode,
    UnaryExpression,
    parse_expression,
)

logger = logging.getLogger(__name__)


class FreeVariableCollector:
    """
    Collects free identifiers from a syntax tree.

    Scoping is lexical: names bound by an enclosing function literal are
    passed down as ``bound`` and are not free inside its body. Block-bodied
    functions are not descended, so names used only inside them are not
    discovered.
    """

    def __init__(self, builtins: frozenset[str] = BUILT_IN_VARIABLES):
        """
        Initialize the collector.

        Params:
            builtins: Names never reported, regardless of position
        """
        self.builtins = builtins
        self.found: set[str] = set()

    def collect(self, node: SyntaxNode) -> list[str]:
        """Visit ``node`` and return every free name seen so far, sorted."""
        self._visit(node, frozenset())
        return sorted(self.found)

    def _visit(self, node: SyntaxNode | None, bound: frozenset[str]) -> None:
        if node is None:
            return

        if isinstance(node, Identifier):
            if not is_builtin(node.name, self.builtins) and node.name not in bound:
                self.found.add(node.name)

        elif isinstance(node, Literal):
            pass

        elif isinstance(node, BinaryExpression):
            self._visit(node.left, bound)
            self._visit(node.right, bound)

        elif isinstance(node, UnaryExpression):
            self._visit(node.argument, bound)

        elif isinstance(node, ConditionalExpression):
            self._visit(node.test, bound)
            self._visit(node.consequent, bound)
            self._visit(node.alternate, bound)

        elif isinstance(node, MemberExpression):
            self._visit(node.object, bound)
            # b in a.b is a field label, not a variable
            if node.computed:
                self._visit(node.property, bound)

        elif isinstance(node, CallExpression):
            self._visit(node.callee, bound)
            for argument in node.arguments:
                self._visit(argument, bound)

        elif isinstance(node, ArrayExpression):
            for element in node.elements:
                if element is not None:
                    self._visit(element, bound)

        elif isinstance(node, ObjectExpression):
            for prop in node.properties:
                self._visit(prop, bound)

        elif isinstance(node, Property):
            self._visit_key(node, bound)
            self._visit(node.value, bound)

        elif isinstance(node, FunctionExpression):
            inner = bound | set(node.params)
            if node.name:
                inner = inner | {node.name}
            # Defaults may refer to other parameters
            for default in node.defaults:
                self._visit(default, inner)
            if node.body is not None:
                self._visit(node.body, inner)

        elif isinstance(node, OtherNode):
            for child in node.children:
                self._visit(child, bound)

        else:
            logger.debug("Skipping unrecognized node kind: %s", node.kind)

    def _visit_key(self, prop: Property, bound: frozenset[str]) -> None:
        """Object keys only read variables when computed, as in ``{[k]: v}``."""
        if prop.computed:
            self._visit(prop.key, bound)


def extract_free_variables(
    node: SyntaxNode, builtins: frozenset[str] = BUILT_IN_VARIABLES
) -> list[str]:
    """
    Extract the free variable names of a parsed expression.

    Params:
        node: Root of the syntax tree
        builtins: Names never reported as free

    Returns:
        Sorted list of distinct free variable names
    """
    return FreeVariableCollector(builtins).collect(node)


def strip_delimiters(expression: str) -> str:
    """Remove one leading ``{`` and one trailing ``}``, then trim whitespace."""
    if expression.startswith("{"):
        expression = expression[1:]
    if expression.endswith("}"):
        expression = expression[:-1]
    return expression.strip()


def extract_variables_from_expression(
    expression: str,
    builtins: frozenset[str] = BUILT_IN_VARIABLES,
    schema_name: str | None = None,
) -> list[str]:
    """
    Extract variable names from expression field content.

    Example: ``"Number(price) * quantity"`` gives ``["price", "quantity"]``.
    Invalid expressions give an empty list; the failure is only logged.

    Params:
        expression: Expression text, optionally wrapped in ``{`` and ``}``
        builtins: Names never reported as free
        schema_name: Owning schema name, used in diagnostics only

    Returns:
        Sorted list of distinct free variable names
    """
    if not expression:
        return []

    cleaned = strip_delimiters(expression)
    if not cleaned:
        return []

    try:
        tree = parse_expression(cleaned, schema_name=schema_name)
    except ExpressionParseError as e:
        logger.debug("Failed to parse expression:\n%s", e.format(ErrorLevel.DEVELOPER))
        return []

    return extract_free_variables(tree, builtins)
