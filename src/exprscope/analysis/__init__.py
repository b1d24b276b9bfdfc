"""
Expression analysis components.

This package provides the built-in name table and the free variable
analysis run over parsed expressions.
"""

from exprscope.analysis.builtins import (
    BUILT_IN_VARIABLES,
    GLOBAL_OBJECTS,
    GLOBAL_VALUES,
    RENDER_CONTEXT_VARIABLES,
    is_builtin,
)
from exprscope.analysis.free_variables import (
    FreeVariableCollector,
    extract_free_variables,
    extract_variables_from_expression,
    strip_delimiters,
)

__all__ = [
    "BUILT_IN_VARIABLES",
    "GLOBAL_OBJECTS",
    "GLOBAL_VALUES",
    "RENDER_CONTEXT_VARIABLES",
    "is_builtin",
    "FreeVariableCollector",
    "extract_free_variables",
    "extract_variables_from_expression",
    "strip_delimiters",
]
