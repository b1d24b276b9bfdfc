"""
Shared test fixtures for the exprscope test suite.
"""

import pytest

from exprscope.config import reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings and a fresh settings cache."""
    for name in ("EXPRSCOPE_LOG_LEVEL", "EXPRSCOPE_EXTRA_BUILTINS", "EXPRSCOPE_EXPRESSION_FIELD_TYPE"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def invoice_schemas():
    """A small invoice template: inputs, shapes, and expression fields."""
    return [
        {"type": "text", "name": "customer"},
        {"type": "text", "name": "price"},
        {"type": "text", "name": "stamp", "readOnly": True},
        {"type": "line", "name": "divider"},
        {"type": "expressionField", "name": "subtotal", "content": "{Number(price) * quantity}"},
        {"type": "expressionField", "name": "greeting", "content": "{`Dear ${customer}`}"},
        {"type": "expressionField", "name": "footer", "content": "{currentPage + ' / ' + totalPages}"},
    ]
