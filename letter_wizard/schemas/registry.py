# letter_wizard/schemas/registry.py
"""
Field schema registry.

Maps each document type to its declarative schema. All lookups are pure:
unknown types yield an empty field list rather than raising, so callers must
guard against an unselected type themselves.
"""

from collections.abc import Mapping
from typing import Any

from letter_wizard.models.fields import DocumentType, FieldDefinition
from letter_wizard.models.rules import ConditionalGroup, DocumentSchema
from letter_wizard.schemas import (
    demand_letter,
    employment_contract,
    employment_termination,
    general_legal,
    lease_agreement,
    lease_termination,
    nda,
    power_of_attorney,
    settlement_agreement,
    workplace_complaint,
)

_SCHEMAS: dict[DocumentType, DocumentSchema] = {
    module.SCHEMA.document_type: module.SCHEMA
    for module in (
        employment_termination,
        employment_contract,
        demand_letter,
        settlement_agreement,
        lease_agreement,
        lease_termination,
        nda,
        power_of_attorney,
        workplace_complaint,
        general_legal,
    )
}

DOCUMENT_TYPES: tuple[DocumentType, ...] = tuple(DocumentType)


def get_schema(document_type: "DocumentType | str | None") -> DocumentSchema | None:
    """Return the schema for a document type, or None if unknown."""
    parsed = DocumentType.parse(document_type)
    if parsed is None:
        return None
    return _SCHEMAS.get(parsed)


def get_fields(document_type: "DocumentType | str | None") -> list[FieldDefinition]:
    """
    Ordered field definitions for a document type.

    Order is stable across calls and drives step partitioning.

    Args:
        document_type: DocumentType member or its string value

    Returns:
        List of field definitions (empty for unknown types)
    """
    schema = get_schema(document_type)
    if schema is None:
        return []
    return list(schema.fields)


def get_field_count(document_type: "DocumentType | str | None") -> int:
    schema = get_schema(document_type)
    return len(schema.fields) if schema else 0


def is_field_enabled(
    document_type: "DocumentType | str | None",
    field_name: str,
    values: Mapping[str, Any],
) -> bool:
    """False while a field's controlling trigger does not match."""
    schema = get_schema(document_type)
    if schema is None:
        return False
    return schema.is_enabled(field_name, values)


def get_parent_field_info(
    document_type: "DocumentType | str | None", field_name: str
) -> ConditionalGroup | None:
    """Conditional group (trigger and N/A label) controlling a field, if any."""
    schema = get_schema(document_type)
    if schema is None:
        return None
    return schema.group_for(field_name)
