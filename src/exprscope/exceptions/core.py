"""
Exception classes for expression variable extraction.

This module defines the error types raised while turning expression field
content into syntax trees, together with the context used to report where
a failure happened.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Schema and expression only
    DEVELOPER = "developer"  # Adds source position of the syntax error


@dataclass(frozen=True)
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error occurred in template terms (schema name, the
    expression text) and in source terms (line and column inside the
    expression). Supports formatting at different detail levels.

    Params:
        expression: The expression text that failed to parse
        schema_name: Name of the schema the expression belongs to, if known
        line: 1-based line of the first syntax error inside the expression
        column: 1-based column of the first syntax error inside the expression
    """

    expression: str | None = None
    schema_name: str | None = None
    line: int | None = None
    column: int | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.schema_name:
            lines.append(f"  in schema '{self.schema_name}'")

        if error_level == ErrorLevel.DEVELOPER and self.line is not None:
            if self.column is not None:
                lines.append(f"  at line {self.line}, column {self.column}")
            else:
                lines.append(f"  at line {self.line}")

        if self.expression is not None:
            lines.append(f"  expression: {self.expression}")

        return "\n".join(lines)


class ExprScopeError(Exception):
    """Base exception for all expression analysis errors."""

    pass


class ExpressionParseError(ExprScopeError):
    """Raised when expression text is not a valid single expression."""

    def __init__(
        self,
        expression: str,
        reason: str = "not a valid expression",
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            expression: The expression text that failed to parse
            reason: Short description of what went wrong
            context: Location details for the failure
            error_level: Detail level used when rendering the message
        """
        self.expression = expression
        self.reason = reason
        self.context = context or ErrorContext(expression=expression)
        self.error_level = error_level
        super().__init__(self.format(error_level))

    def format(self, error_level: ErrorLevel) -> str:
        """
        Render the error message at the requested detail level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Message with the reason followed by formatted location lines
        """
        location = self.context.format_location(error_level)
        if location:
            return f"Cannot parse expression: {self.reason}\n{location}"
        return f"Cannot parse expression: {self.reason}"
