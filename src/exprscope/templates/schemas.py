"""
Template schema models.

Pydantic models for the parts of a template document the extractor reads,
and for the report handed back to the template tester.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Shape and layout schemas never supply bindable values
STATIC_SCHEMA_TYPES = frozenset({"line", "rectangle", "ellipse", "table", "nestedTable"})


class SchemaDescriptor(BaseModel):
    """A single schema of a template page, as far as variable analysis cares."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    type: str | None = Field(default=None, description="Schema kind, e.g. 'text'")
    name: str | None = Field(default=None, description="Input key the schema binds")
    content: str | None = Field(default=None, description="Expression source for expression fields")
    read_only: bool | None = Field(default=None, alias="readOnly")


class VariableReport(BaseModel):
    """Required template inputs split by whether a field already supplies them."""

    required: list[str] = Field(default_factory=list)
    available: list[str] = Field(default_factory=list)
    provided: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


SchemaLike = SchemaDescriptor | Mapping[str, Any]


def to_descriptor(schema: SchemaLike | Any) -> SchemaDescriptor:
    """Coerce a mapping or attribute object into a SchemaDescriptor."""
    if isinstance(schema, SchemaDescriptor):
        return schema
    if isinstance(schema, Mapping):
        return SchemaDescriptor.model_validate(dict(schema))
    return SchemaDescriptor.model_validate(schema, from_attributes=True)


def to_descriptors(schemas: Iterable[SchemaLike]) -> list[SchemaDescriptor]:
    return [to_descriptor(schema) for schema in schemas]


def flatten_template_schemas(template: Mapping[str, Any]) -> list[SchemaDescriptor]:
    """
    Flatten the per-page schemas of a template document.

    Pages are either lists of schemas or, in the legacy layout, mappings of
    schema name to schema. In the legacy layout the key supplies ``name``
    when the schema does not carry one.

    Params:
        template: Template document with a ``schemas`` entry

    Returns:
        Descriptors of every page, in page order
    """
    descriptors: list[SchemaDescriptor] = []
    for page in template.get("schemas") or []:
        if isinstance(page, Mapping):
            for key, schema in page.items():
                data = dict(schema)
                data.setdefault("name", key)
                descriptors.append(to_descriptor(data))
        else:
            descriptors.extend(to_descriptors(page))
    return descriptors
