from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .models.schema import FieldDefinition, FieldKind, SectionDefinition

REQUIRED_MESSAGE = "This field is required"
EMAIL_MESSAGE = "Please enter a valid email address"
PHONE_MESSAGE = "Please enter a valid 10-digit phone number"

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"[0-9]{10}")


@dataclass(frozen=True)
class SectionValidation:
    errors_by_field_id: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors_by_field_id


def _check_email(value: str) -> str | None:
    return None if EMAIL_PATTERN.fullmatch(value) else EMAIL_MESSAGE


def _check_phone(value: str) -> str | None:
    return None if PHONE_PATTERN.fullmatch(value) else PHONE_MESSAGE


def _no_format(value: str) -> str | None:
    return None


FORMAT_RULES: Mapping[FieldKind, Callable[[str], str | None]] = {
    FieldKind.text: _no_format,
    FieldKind.tel: _check_phone,
    FieldKind.email: _check_email,
    FieldKind.textarea: _no_format,
    FieldKind.date: _no_format,
    FieldKind.dropdown: _no_format,
    FieldKind.radio: _no_format,
    FieldKind.checkbox: _no_format,
}


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def validate_field(field: FieldDefinition, value: Any) -> str | None:
    """Return the first violated rule's message for ``value``, or None.

    Rules run in a fixed order: required, minimum length, maximum length,
    then the format rule for the field's kind. Only ``""`` and ``None`` count
    as empty, so an unchecked required checkbox (``False``) passes.
    """
    if field.required and _is_empty(value):
        return field.validation_message or REQUIRED_MESSAGE

    if not isinstance(value, str):
        return None

    if field.min_length and len(value) < field.min_length:
        return f"Minimum length is {field.min_length} characters"

    if field.max_length and len(value) > field.max_length:
        return f"Maximum length is {field.max_length} characters"

    if not value:
        return None
    return FORMAT_RULES[field.kind](value)


def validate_section(section: SectionDefinition, values: Mapping[str, Any]) -> SectionValidation:
    errors: dict[str, str] = {}
    for definition in section.fields:
        error = validate_field(definition, values.get(definition.field_id))
        if error:
            errors[definition.field_id] = error
    return SectionValidation(errors_by_field_id=errors)


__all__ = [
    "SectionValidation",
    "validate_field",
    "validate_section",
    "REQUIRED_MESSAGE",
    "EMAIL_MESSAGE",
    "PHONE_MESSAGE",
]
