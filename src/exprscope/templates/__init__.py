"""
Template-level variable processing.

This package provides schema models and the functions that aggregate
expression variables across a template and compare them with the names
its input fields supply.
"""

from exprscope.templates.schemas import (
    STATIC_SCHEMA_TYPES,
    SchemaDescriptor,
    VariableReport,
    flatten_template_schemas,
    to_descriptor,
)
from exprscope.templates.variables import (
    VariableCategories,
    build_variable_report,
    categorize_variables,
    extract_all_variables,
    get_available_field_names,
    is_variable_provided_by_field,
)

__all__ = [
    # Schema models
    "STATIC_SCHEMA_TYPES",
    "SchemaDescriptor",
    "VariableReport",
    "flatten_template_schemas",
    "to_descriptor",
    # Variable processing
    "VariableCategories",
    "build_variable_report",
    "categorize_variables",
    "extract_all_variables",
    "get_available_field_names",
    "is_variable_provided_by_field",
]
