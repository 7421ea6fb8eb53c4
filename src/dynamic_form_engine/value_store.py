from __future__ import annotations

from typing import Mapping

from .models.schema import FieldDefinition, FieldKind, FormSchema
from .models.state import FieldValue


def default_value(field: FieldDefinition) -> FieldValue:
    return False if field.kind is FieldKind.checkbox else ""


def initialize_values(schema: FormSchema) -> dict[str, FieldValue]:
    """Seed a value for every field of every section, visited or not."""
    return {field.field_id: default_value(field) for field in schema.iter_fields()}


def set_value(values: Mapping[str, FieldValue], field_id: str, new_value: FieldValue) -> dict[str, FieldValue]:
    updated = dict(values)
    updated[field_id] = new_value
    return updated


def clear_error(errors: Mapping[str, str], field_id: str) -> dict[str, str]:
    """Drop the stale error for ``field_id``; applied whenever its value changes."""
    if field_id not in errors:
        return dict(errors)
    return {key: message for key, message in errors.items() if key != field_id}


__all__ = ["default_value", "initialize_values", "set_value", "clear_error"]
