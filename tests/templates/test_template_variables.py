"""
Tests for template-level variable aggregation and categorization.
"""

import pytest

from exprscope.config import Settings, reset_settings
from exprscope.templates import (
    STATIC_SCHEMA_TYPES,
    SchemaDescriptor,
    VariableCategories,
    build_variable_report,
    categorize_variables,
    extract_all_variables,
    get_available_field_names,
    is_variable_provided_by_field,
)


class TestExtractAllVariables:
    """Tests for aggregating expression variables across schemas."""

    def test_reference_template(self):
        """Test the text-plus-expression reference template."""
        schemas = [
            {"type": "text", "name": "price"},
            {"type": "expressionField", "content": "{price*qty}"},
        ]
        assert extract_all_variables(schemas) == ["price", "qty"]

    def test_union_over_fields(self, invoice_schemas):
        """Test variables of every expression field are unioned and sorted."""
        assert extract_all_variables(invoice_schemas) == ["customer", "price", "quantity"]

    def test_non_expression_content_ignored(self):
        """Test content of other schema types is never analyzed."""
        schemas = [{"type": "text", "name": "note", "content": "{hidden}"}]
        assert extract_all_variables(schemas) == []

    def test_empty_content_ignored(self):
        """Test expression fields without content contribute nothing."""
        schemas = [
            {"type": "expressionField", "content": ""},
            {"type": "expressionField"},
        ]
        assert extract_all_variables(schemas) == []

    def test_malformed_expression_does_not_block_others(self):
        """Test a parse failure only drops that field's variables."""
        schemas = [
            {"type": "expressionField", "name": "broken", "content": "{price +}"},
            {"type": "expressionField", "name": "ok", "content": "{quantity * 2}"},
        ]
        assert extract_all_variables(schemas) == ["quantity"]

    def test_accepts_descriptor_models(self):
        """Test SchemaDescriptor instances are accepted as well as mappings."""
        schemas = [SchemaDescriptor(type="expressionField", content="{a + b}")]
        assert extract_all_variables(schemas) == ["a", "b"]

    def test_idempotent(self, invoice_schemas):
        """Test two runs over the same schemas give identical output."""
        assert extract_all_variables(invoice_schemas) == extract_all_variables(invoice_schemas)

    def test_concurrent_matches_sequential(self, invoice_schemas):
        """Test thread-pool analysis gives the same result as sequential analysis."""
        sequential = extract_all_variables(invoice_schemas)
        concurrent = extract_all_variables(invoice_schemas, concurrent=True, max_workers=4)
        assert concurrent == sequential

    def test_extra_builtins_from_settings(self, monkeypatch):
        """Test configured extra built-ins are excluded."""
        monkeypatch.setenv("EXPRSCOPE_EXTRA_BUILTINS", '["company"]')
        reset_settings()
        schemas = [{"type": "expressionField", "content": "{company + price}"}]
        assert extract_all_variables(schemas) == ["price"]

    def test_comma_separated_extra_builtins(self, monkeypatch):
        """Test comma separated extra built-ins are honored by the aggregator."""
        monkeypatch.setenv("EXPRSCOPE_EXTRA_BUILTINS", "company,pageTitle")
        reset_settings()
        schemas = [{"type": "expressionField", "content": "{company + pageTitle + price}"}]
        assert extract_all_variables(schemas) == ["price"]

    def test_expression_field_type_from_settings(self, monkeypatch):
        """Test the expression schema type can be configured."""
        monkeypatch.setenv("EXPRSCOPE_EXPRESSION_FIELD_TYPE", "formula")
        reset_settings()
        schemas = [
            {"type": "formula", "content": "{a}"},
            {"type": "expressionField", "content": "{b}"},
        ]
        assert extract_all_variables(schemas) == ["a"]
        assert Settings().expression_field_type == "formula"


class TestAvailableFieldNames:
    """Tests for resolving which names input fields supply."""

    def test_reference_template(self):
        """Test only the text field supplies a name."""
        schemas = [
            {"type": "text", "name": "price"},
            {"type": "expressionField", "content": "{price*qty}"},
        ]
        assert get_available_field_names(schemas) == {"price"}

    def test_exclusions(self, invoice_schemas):
        """Test read-only, static and expression fields are excluded."""
        assert get_available_field_names(invoice_schemas) == {"customer", "price"}

    @pytest.mark.parametrize("schema_type", sorted(STATIC_SCHEMA_TYPES))
    def test_static_types_never_supply(self, schema_type):
        """Test each static schema type is excluded even when named."""
        assert get_available_field_names([{"type": schema_type, "name": "shape"}]) == set()

    def test_read_only_false_still_supplies(self):
        """Test an explicit readOnly false keeps the field."""
        assert get_available_field_names([{"type": "text", "name": "a", "readOnly": False}]) == {"a"}

    def test_missing_name_and_type(self):
        """Test unnamed schemas contribute nothing and untyped ones still count."""
        schemas = [{"type": "text"}, {"name": "loose"}]
        assert get_available_field_names(schemas) == {"loose"}


class TestCategorizeVariables:
    """Tests for splitting required variables into provided and missing."""

    def test_reference_template(self):
        """Test the reference partition."""
        result = categorize_variables(["price", "qty"], {"price"})
        assert result == VariableCategories(provided=["price"], missing=["qty"])

    def test_order_preserved(self):
        """Test the input order is kept within each list."""
        result = categorize_variables(["z", "a", "m", "b"], {"m", "z"})
        assert result.provided == ["z", "m"]
        assert result.missing == ["a", "b"]

    def test_partition_covers_inputs_exactly_once(self):
        """Test provided and missing are disjoint and cover the input."""
        required = ["a", "b", "c", "d"]
        result = categorize_variables(required, {"b", "d", "unused"})
        assert set(result.provided) | set(result.missing) == set(required)
        assert set(result.provided) & set(result.missing) == set()

    def test_empty_inputs(self):
        """Test empty input gives empty lists."""
        assert categorize_variables([], set()) == VariableCategories()

    def test_is_variable_provided_by_field(self):
        """Test the membership helper."""
        assert is_variable_provided_by_field("price", {"price"})
        assert not is_variable_provided_by_field("qty", {"price"})


class TestVariableReport:
    """Tests for the combined report."""

    def test_report_from_schema_list(self, invoice_schemas):
        """Test the report over a flat schema list."""
        report = build_variable_report(invoice_schemas)
        assert report.required == ["customer", "price", "quantity"]
        assert report.available == ["customer", "price"]
        assert report.provided == ["customer", "price"]
        assert report.missing == ["quantity"]

    def test_report_from_template_pages(self):
        """Test a template document with list pages and a legacy mapping page."""
        template = {
            "basePdf": "BLANK_PDF",
            "schemas": [
                [
                    {"type": "text", "name": "price"},
                    {"type": "expressionField", "name": "total", "content": "{price * qty}"},
                ],
                {
                    "tax": {"type": "text"},
                    "grand": {"type": "expressionField", "content": "{total + tax + shipping}"},
                },
            ],
        }
        report = build_variable_report(template)
        assert report.required == ["price", "qty", "shipping", "tax", "total"]
        assert report.available == ["price", "tax"]
        assert report.missing == ["qty", "shipping", "total"]

    def test_report_serializes(self):
        """Test the report dumps to plain data for the UI."""
        report = build_variable_report([{"type": "expressionField", "content": "{a}"}])
        assert report.model_dump() == {
            "required": ["a"],
            "available": [],
            "provided": [],
            "missing": ["a"],
        }
