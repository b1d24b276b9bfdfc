"""
exprscope - Static variable extraction for template expression fields

exprscope parses the expressions embedded in PDF template schemas and reports,
without evaluating them, which input variables a template requires.
"""

from importlib.metadata import version

from exprscope.analysis import extract_free_variables, extract_variables_from_expression
from exprscope.exceptions import ExpressionParseError
from exprscope.parsing import parse_expression
from exprscope.templates import (
    build_variable_report,
    categorize_variables,
    extract_all_variables,
    get_available_field_names,
)

__version__ = version("exprscope")

__all__ = [
    "__version__",
    "ExpressionParseError",
    "parse_expression",
    "extract_free_variables",
    "extract_variables_from_expression",
    "extract_all_variables",
    "get_available_field_names",
    "categorize_variables",
    "build_variable_report",
]
