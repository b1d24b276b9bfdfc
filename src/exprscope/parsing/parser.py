"""
Expression parser adapter.

Turns raw expression field text into the syntax tree defined in
``exprscope.parsing.nodes``. Grammar work is delegated to tree-sitter with
the JavaScript grammar; this module only selects the single expression at
the start of the text and normalizes the concrete syntax tree into the
modeled node variants. No semantic analysis happens here.
"""

import logging
import re

import tree_sitter_javascript as tsjavascript
from tree_sitter import Language, Node, Parser

from exprscope.exceptions import ErrorContext, ExpressionParseError
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

JAVASCRIPT_LANGUAGE = Language(tsjavascript.language())

logger = logging.getLogger(__name__)

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

LITERAL_TYPES = frozenset(
    {"number", "string", "regex", "true", "false", "null"}
)

FUNCTION_TYPES = frozenset(
    {"function_expression", "function", "generator_function"}
)

# Text that would continue an expression rather than end it
CONTINUATION_PATTERN = re.compile(r"^(?:[-+*/%&|^<>=?.,(\[`]|!=|in\b|instanceof\b)")

# Leaves that read a variable
IDENTIFIER_TYPES = frozenset({"identifier", "shorthand_property_identifier", "undefined"})

# Leaves that name a property and never read a variable
PROPERTY_NAME_TYPES = frozenset(
    {
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier_pattern",
    }
)


def parse_expression(text: str, schema_name: str | None = None) -> SyntaxNode:
    """
    Parse a single expression starting at the beginning of ``text``.

    The text is parsed in expression context, so a leading ``{`` is an object
    literal. When the whole text is not one expression, the longest leading
    expression is taken and whatever follows it is ignored, unless that text
    continues the expression (``price +`` is an error, ``price )`` is not).

    Params:
        text: Expression source without template delimiters
        schema_name: Name of the owning schema, used in error context only

    Returns:
        Root node of the normalized syntax tree

    Raises:
        ExpressionParseError: If no valid expression starts at offset 0
    """
    source = text.strip()
    if not source:
        raise ExpressionParseError(
            text,
            "empty expression",
            ErrorContext(expression=text, schema_name=schema_name),
        )

    parser = Parser(JAVASCRIPT_LANGUAGE)
    source_bytes = source.encode("utf-8")

    expression = _parse_wrapped(parser, source_bytes)
    if expression is not None:
        return expression

    tree = parser.parse(source_bytes)
    for end in _token_ends(tree.root_node, len(source_bytes)):
        expression = _parse_wrapped(parser, source_bytes[:end])
        if expression is None:
            continue
        rest = source_bytes[end:].decode("utf-8").lstrip()
        if CONTINUATION_PATTERN.match(rest):
            break
        return expression

    line, column = _first_error_position(tree.root_node)
    raise ExpressionParseError(
        text,
        "not a valid expression",
        ErrorContext(expression=text, schema_name=schema_name, line=line, column=column),
    )


def _named_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _parse_wrapped(parser: Parser, source: bytes) -> SyntaxNode | None:
    """Converted expression of ``( source )``, or None if that does not parse cleanly."""
    tree = parser.parse(b"(" + source + b"\n)")
    expression = _wrapped_expression(tree.root_node)
    if expression is None:
        return None
    return _convert(expression)


def _wrapped_expression(root: Node) -> Node | None:
    """Expression inside ``( ... )`` when the wrapped parse is error free."""
    if root.has_error:
        return None
    statements = _named_children(root)
    if len(statements) != 1 or statements[0].type != "expression_statement":
        return None
    children = _named_children(statements[0])
    if len(children) != 1 or children[0].type != "parenthesized_expression":
        return None
    inner = _named_children(children[0])
    if len(inner) != 1:
        return None
    return inner[0]


def _token_ends(root: Node, length: int) -> list[int]:
    """End offsets of every token short of the full text, longest first."""
    ends: set[int] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count == 0:
            if 0 < node.end_byte < length:
                ends.add(node.end_byte)
        else:
            stack.extend(node.children)
    return sorted(ends, reverse=True)


def _first_error_position(root: Node) -> tuple[int | None, int | None]:
    """1-based line and column of the first error or missing node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            return row + 1, column + 1
        stack.extend(reversed(node.children))
    return None, None


def _convert(node: Node) -> SyntaxNode:
    """Normalize one concrete syntax node into the modeled variants."""
    node_type = node.type

    if node_type == "parenthesized_expression":
        children = _named_children(node)
        if len(children) == 1:
            return _convert(children[0])
        return _other(node)

    if node_type in IDENTIFIER_TYPES:
        return Identifier(_text(node))

    if node_type in LITERAL_TYPES:
        return Literal(_text(node))

    if node_type == "binary_expression":
        operator = _text(node.child_by_field_name("operator"))
        node_class = LogicalExpression if operator in LOGICAL_OPERATORS else BinaryExpression
        return node_class(
            operator=operator,
            left=_convert(node.child_by_field_name("left")),
            right=_convert(node.child_by_field_name("right")),
        )

    if node_type == "unary_expression":
        return UnaryExpression(
            operator=_text(node.child_by_field_name("operator")),
            argument=_convert(node.child_by_field_name("argument")),
        )

    if node_type == "ternary_expression":
        return ConditionalExpression(
            test=_convert(node.child_by_field_name("condition")),
            consequent=_convert(node.child_by_field_name("consequence")),
            alternate=_convert(node.child_by_field_name("alternative")),
        )

    if node_type == "member_expression":
        prop = node.child_by_field_name("property")
        return MemberExpression(
            object=_convert(node.child_by_field_name("object")),
            property=Identifier(_text(prop)),
            computed=False,
            optional=_has_optional_chain(node),
        )

    if node_type == "subscript_expression":
        return MemberExpression(
            object=_convert(node.child_by_field_name("object")),
            property=_convert(node.child_by_field_name("index")),
            computed=True,
            optional=_has_optional_chain(node),
        )

    if node_type == "call_expression":
        return _convert_call(node)

    if node_type == "array":
        return _convert_array(node)

    if node_type == "object":
        return _convert_object(node)

    if node_type in ("arrow_function", "method_definition") or node_type in FUNCTION_TYPES:
        return _convert_function(node)

    return _other(node)


def _other(node: Node) -> OtherNode:
    """Generic fallback: keep named sub-nodes other than property names and blocks."""
    children = tuple(
        _convert(child)
        for child in _named_children(node)
        if child.type not in PROPERTY_NAME_TYPES and child.type != "statement_block"
    )
    return OtherNode(node_type=node.type, children=children)


def _has_optional_chain(node: Node) -> bool:
    return any(child.type == "optional_chain" for child in node.children)


def _property_key(node: Node) -> SyntaxNode:
    """Non-computed object key: a name label or a string/number literal."""
    if node.type in PROPERTY_NAME_TYPES:
        return Identifier(_text(node))
    return Literal(_text(node))


def _convert_call(node: Node) -> CallExpression:
    callee = _convert(node.child_by_field_name("function"))
    arguments_node = node.child_by_field_name("arguments")
    if arguments_node is None:
        arguments: tuple[SyntaxNode, ...] = ()
    elif arguments_node.type == "arguments":
        arguments = tuple(_convert(arg) for arg in _named_children(arguments_node))
    else:
        # Tagged template: tag`text ${value}`
        arguments = (_convert(arguments_node),)
    return CallExpression(
        callee=callee,
        arguments=arguments,
        optional=_has_optional_chain(node),
    )


def _convert_array(node: Node) -> ArrayExpression:
    elements: list[SyntaxNode | None] = []
    expecting_element = True
    for child in node.children:
        if child.type == "comment":
            continue
        if child.type == ",":
            if expecting_element:
                elements.append(None)
            expecting_element = True
        elif child.is_named:
            elements.append(_convert(child))
            expecting_element = False
    return ArrayExpression(elements=tuple(elements))


def _convert_object(node: Node) -> ObjectExpression:
    properties: list[SyntaxNode] = []
    for child in _named_children(node):
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
            value = _convert(child.child_by_field_name("value"))
            if key_node.type == "computed_property_name":
                key_children = _named_children(key_node)
                properties.append(
                    Property(key=_convert(key_children[0]), value=value, computed=True)
                )
            else:
                properties.append(Property(key=_property_key(key_node), value=value))
        elif child.type == "shorthand_property_identifier":
            name = _text(child)
            properties.append(
                Property(key=Identifier(name), value=Identifier(name), shorthand=True)
            )
        elif child.type == "method_definition":
            name_node = child.child_by_field_name("name")
            method = _convert_function(child)
            if name_node is not None and name_node.type == "computed_property_name":
                key = _convert(_named_children(name_node)[0])
                properties.append(Property(key=key, value=method, computed=True))
            else:
                key = _property_key(name_node) if name_node is not None else Literal("")
                properties.append(Property(key=key, value=method))
        else:
            properties.append(_convert(child))
    return ObjectExpression(properties=tuple(properties))


def _convert_function(node: Node) -> FunctionExpression:
    names: list[str] = []
    defaults: list[SyntaxNode] = []

    single = node.child_by_field_name("parameter")
    if single is not None:
        names.append(_text(single))
    parameters = node.child_by_field_name("parameters")
    if parameters is not None:
        for param in _named_children(parameters):
            _bind_pattern(param, names, defaults)

    body_node = node.child_by_field_name("body")
    body = None
    if body_node is not None and body_node.type != "statement_block":
        body = _convert(body_node)

    name = None
    if node.type != "method_definition":
        name_node = node.child_by_field_name("name")
        if name_node is not None:
            name = _text(name_node)

    return FunctionExpression(
        params=tuple(names),
        defaults=tuple(defaults),
        body=body,
        arrow=node.type == "arrow_function",
        name=name,
    )


def _bind_pattern(node: Node, names: list[str], defaults: list[SyntaxNode]) -> None:
    """Collect names bound by a parameter pattern and its default values."""
    node_type = node.type

    if node_type in ("identifier", "shorthand_property_identifier_pattern", "undefined"):
        names.append(_text(node))
    elif node_type in ("assignment_pattern", "object_assignment_pattern"):
        _bind_pattern(node.child_by_field_name("left"), names, defaults)
        defaults.append(_convert(node.child_by_field_name("right")))
    elif node_type == "pair_pattern":
        key_node = node.child_by_field_name("key")
        if key_node is not None and key_node.type == "computed_property_name":
            defaults.extend(_convert(child) for child in _named_children(key_node))
        _bind_pattern(node.child_by_field_name("value"), names, defaults)
    elif node_type in ("object_pattern", "array_pattern", "rest_pattern"):
        for child in _named_children(node):
            _bind_pattern(child, names, defaults)
    else:
        logger.debug("Ignoring unsupported parameter pattern: %s", node_type)
