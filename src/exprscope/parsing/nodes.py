"""
Syntax node definitions for parsed expressions.

Every parse produces a fresh, immutable tree built from the variants below.
Productions outside the modeled subset are kept as ``OtherNode`` so that
analysis can still reach the sub-expressions they contain.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SyntaxNode:
    """Base class for all expression syntax nodes."""

    @property
    def kind(self) -> str:
        """Node-kind tag used for dispatch and diagnostics."""
        return type(self).__name__


@dataclass(frozen=True)
class Identifier(SyntaxNode):
    """A variable reference such as ``price``."""

    name: str


@dataclass(frozen=True)
class Literal(SyntaxNode):
    """A number, string, boolean, null or regex literal."""

    raw: str


@dataclass(frozen=True)
class BinaryExpression(SyntaxNode):
    """Arithmetic, comparison and bitwise operators."""

    operator: str
    left: SyntaxNode
    right: SyntaxNode


@dataclass(frozen=True)
class LogicalExpression(BinaryExpression):
    """Short-circuit operators: ``&&``, ``||`` and ``??``."""


@dataclass(frozen=True)
class UnaryExpression(SyntaxNode):
    """Prefix operators such as ``!``, ``-`` and ``typeof``."""

    operator: str
    argument: SyntaxNode


@dataclass(frozen=True)
class ConditionalExpression(SyntaxNode):
    """The ternary ``test ? consequent : alternate``."""

    test: SyntaxNode
    consequent: SyntaxNode
    alternate: SyntaxNode


@dataclass(frozen=True)
class MemberExpression(SyntaxNode):
    """
    Property access.

    Params:
        object: Expression whose property is read
        property: Property name (non-computed) or key expression (computed)
        computed: True for the bracket form ``a[b]``
        optional: True when accessed through ``?.``
    """

    object: SyntaxNode
    property: SyntaxNode
    computed: bool = False
    optional: bool = False


@dataclass(frozen=True)
class CallExpression(SyntaxNode):
    """A function call ``callee(arguments...)``."""

    callee: SyntaxNode
    arguments: tuple[SyntaxNode, ...] = ()
    optional: bool = False


@dataclass(frozen=True)
class ArrayExpression(SyntaxNode):
    """Array literal; holes (``[a, , b]``) are stored as ``None``."""

    elements: tuple[SyntaxNode | None, ...] = ()


@dataclass(frozen=True)
class Property(SyntaxNode):
    """
    A single ``key: value`` entry of an object literal.

    Params:
        key: Property name, or the key expression when computed
        value: Value expression (the identifier itself for shorthand entries)
        computed: True for ``[key]: value``
        shorthand: True for ``{ total }``
    """

    key: SyntaxNode
    value: SyntaxNode
    computed: bool = False
    shorthand: bool = False


@dataclass(frozen=True)
class ObjectExpression(SyntaxNode):
    """Object literal; spread entries are kept as ``OtherNode``."""

    properties: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True)
class FunctionExpression(SyntaxNode):
    """
    Arrow function or named function expression.

    Params:
        params: Every name bound by the parameter list, destructuring included
        defaults: Default-value expressions of the parameter list
        body: Body expression, or None for a block body
        arrow: True for arrow functions
        name: Own name of a named function expression
    """

    params: tuple[str, ...] = ()
    defaults: tuple[SyntaxNode, ...] = ()
    body: SyntaxNode | None = None
    arrow: bool = True
    name: str | None = None

    @property
    def expression(self) -> bool:
        """True when the body is a single expression rather than a block."""
        return self.body is not None


@dataclass(frozen=True)
class OtherNode(SyntaxNode):
    """
    Any production outside the modeled subset.

    Params:
        node_type: Grammar node type, e.g. ``sequence_expression``
        children: Normalized sub-expressions in source order
    """

    node_type: str
    children: tuple[SyntaxNode, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> str:
        return self.node_type
