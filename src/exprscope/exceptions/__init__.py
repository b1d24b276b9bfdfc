"""
Exception classes for exprscope.

This package provides the exception types used throughout the expression
variable extractor for consistent error handling and reporting.
"""

from exprscope.exceptions.core import (
    ErrorContext,
    ErrorLevel,
    ExpressionParseError,
    ExprScopeError,
)

__all__ = [
    "ErrorContext",
    "ErrorLevel",
    "ExprScopeError",
    "ExpressionParseError",
]
