"""
Template-level variable extraction.

This module runs expression analysis over every expression field of a
template, works out which names ordinary input fields already supply, and
splits the required names into provided and missing ones.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from exprscope.analysis import extract_variables_from_expression
from exprscope.config import get_settings
from exprscope.templates.schemas import (
    STATIC_SCHEMA_TYPES,
    SchemaDescriptor,
    SchemaLike,
    VariableReport,
    flatten_template_schemas,
    to_descriptors,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariableCategories:
    """
    Required variables partitioned by availability.

    Params:
        provided: Names some input field of the template supplies
        missing: Names no input field supplies
    """

    provided: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def extract_all_variables(
    schemas: Iterable[SchemaLike],
    concurrent: bool = False,
    max_workers: int | None = None,
) -> list[str]:
    """
    Get all variables used across the expression fields of a template.

    Schemas whose expression fails to parse contribute nothing.

    Params:
        schemas: Schema descriptors or plain schema mappings
        concurrent: Analyze expression fields on a thread pool
        max_workers: Pool size when ``concurrent`` is set

    Returns:
        Sorted list of distinct variable names
    """
    settings = get_settings()
    builtins = settings.builtins

    expressions = [
        (schema.name, schema.content)
        for schema in to_descriptors(schemas)
        if schema.type == settings.expression_field_type and schema.content
    ]

    def analyze(item: tuple[str | None, str]) -> list[str]:
        name, content = item
        return extract_variables_from_expression(content, builtins, schema_name=name)

    if concurrent and len(expressions) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(analyze, expressions))
    else:
        results = [analyze(item) for item in expressions]

    all_variables: set[str] = set()
    for variables in results:
        all_variables.update(variables)

    logger.debug(
        "Extracted %d variables from %d expression fields",
        len(all_variables),
        len(expressions),
    )
    return sorted(all_variables)


def get_available_field_names(schemas: Iterable[SchemaLike]) -> set[str]:
    """
    Get the field names that can provide values for expressions.

    Includes input fields but excludes read-only, static and expression
    fields.

    Params:
        schemas: Schema descriptors or plain schema mappings

    Returns:
        Set of names supplied by input fields
    """
    expression_field_type = get_settings().expression_field_type
    field_names: set[str] = set()

    for schema in to_descriptors(schemas):
        if schema.read_only:
            continue
        if schema.type == expression_field_type:
            continue
        if (schema.type or "") in STATIC_SCHEMA_TYPES:
            continue
        if schema.name:
            field_names.add(schema.name)

    return field_names


def is_variable_provided_by_field(variable_name: str, available_field_names: set[str]) -> bool:
    """Check if a variable is already provided by another field in the template."""
    return variable_name in available_field_names


def categorize_variables(
    required_variables: Sequence[str], available_field_names: set[str]
) -> VariableCategories:
    """
    Categorize required variables into provided and missing.

    The order of ``required_variables`` is kept within each list.

    Params:
        required_variables: Names the template's expressions read
        available_field_names: Names supplied by input fields

    Returns:
        VariableCategories with the stable partition
    """
    provided = [
        v for v in required_variables if is_variable_provided_by_field(v, available_field_names)
    ]
    missing = [
        v for v in required_variables if not is_variable_provided_by_field(v, available_field_names)
    ]
    return VariableCategories(provided=provided, missing=missing)


def build_variable_report(
    source: Mapping[str, Any] | Iterable[SchemaLike],
    concurrent: bool = False,
) -> VariableReport:
    """
    Build the required/provided/missing report for a template.

    Params:
        source: A template document with per-page ``schemas``, or a flat
            sequence of schemas
        concurrent: Analyze expression fields on a thread pool

    Returns:
        VariableReport for display by the template tester
    """
    if isinstance(source, Mapping):
        descriptors: list[SchemaDescriptor] = flatten_template_schemas(source)
    else:
        descriptors = to_descriptors(source)

    required = extract_all_variables(descriptors, concurrent=concurrent)
    available = get_available_field_names(descriptors)
    categories = categorize_variables(required, available)

    return VariableReport(
        required=required,
        available=sorted(available),
        provided=categories.provided,
        missing=categories.missing,
    )
