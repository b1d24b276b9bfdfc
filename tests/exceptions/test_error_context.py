"""
Tests for error context and formatting.

This module tests ErrorContext, ErrorLevel, and how ExpressionParseError
formats its message based on error level (user vs developer).
"""

from exprscope.exceptions import (
    ErrorContext,
    ErrorLevel,
    ExpressionParseError,
    ExprScopeError,
)


class TestErrorContext:
    """Tests for ErrorContext dataclass."""

    def test_create_minimal_context(self):
        """Test creating ErrorContext with only the expression."""
        ctx = ErrorContext(expression="price +")
        assert ctx.expression == "price +"
        assert ctx.schema_name is None
        assert ctx.line is None

    def test_user_level_hides_position(self):
        """Test USER level shows schema and expression but not the position."""
        ctx = ErrorContext(expression="price +", schema_name="subtotal", line=1, column=8)
        formatted = ctx.format_location(ErrorLevel.USER)
        assert "subtotal" in formatted
        assert "price +" in formatted
        assert "column" not in formatted

    def test_developer_level_shows_position(self):
        """Test DEVELOPER level adds line and column."""
        ctx = ErrorContext(expression="price +", line=1, column=8)
        formatted = ctx.format_location(ErrorLevel.DEVELOPER)
        assert "line 1, column 8" in formatted

    def test_developer_level_line_only(self):
        """Test DEVELOPER level with a line but no column."""
        ctx = ErrorContext(line=2)
        assert ctx.format_location(ErrorLevel.DEVELOPER) == "  at line 2"


class TestExpressionParseError:
    """Tests for ExpressionParseError messages."""

    def test_is_exprscope_error(self):
        """Test the error derives from the package base exception."""
        assert issubclass(ExpressionParseError, ExprScopeError)

    def test_default_context(self):
        """Test a context is created from the expression when none is given."""
        error = ExpressionParseError("a +")
        assert error.context.expression == "a +"
        assert str(error).startswith("Cannot parse expression: not a valid expression")

    def test_format_levels(self):
        """Test the message can be rendered at both levels."""
        error = ExpressionParseError(
            "a +",
            "unexpected end of input",
            ErrorContext(expression="a +", line=1, column=4),
        )
        assert "column 4" not in str(error)
        assert "line 1, column 4" in error.format(ErrorLevel.DEVELOPER)

    def test_developer_error_level_message(self):
        """Test the error level chosen at construction drives str()."""
        error = ExpressionParseError(
            "a +",
            context=ErrorContext(expression="a +", line=1, column=4),
            error_level=ErrorLevel.DEVELOPER,
        )
        assert "line 1, column 4" in str(error)
