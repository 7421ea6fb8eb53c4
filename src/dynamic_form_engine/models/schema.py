from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FieldKind(str, Enum):
    text = "text"
    tel = "tel"
    email = "email"
    textarea = "textarea"
    date = "date"
    dropdown = "dropdown"
    radio = "radio"
    checkbox = "checkbox"


OPTION_KINDS = frozenset({FieldKind.dropdown, FieldKind.radio})


class FieldOption(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    label: str
    data_test_id: str | None = Field(default=None, alias="dataTestId")


class FieldValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str | None = None


class FieldDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_id: str = Field(alias="fieldId", min_length=1)
    kind: FieldKind = Field(alias="type")
    label: str = ""
    required: bool = False
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    max_length: int | None = Field(default=None, alias="maxLength", ge=0)
    validation: FieldValidation | None = None
    options: Tuple[FieldOption, ...] = Field(default_factory=tuple)
    placeholder: str | None = None
    data_test_id: str | None = Field(default=None, alias="dataTestId")

    @model_validator(mode="before")
    @classmethod
    def _flat_validation_message(cls, data: Any) -> Any:
        # Some payloads send the required message flat instead of nested.
        if isinstance(data, dict) and "validationMessage" in data and "validation" not in data:
            data = dict(data)
            data["validation"] = {"message": data.pop("validationMessage")}
        return data

    @model_validator(mode="after")
    def _check_options(self) -> "FieldDefinition":
        if self.kind in OPTION_KINDS and not self.options:
            raise ValueError(f"field {self.field_id!r} of type {self.kind.value} has no options")
        return self

    @property
    def validation_message(self) -> str | None:
        if self.validation is None:
            return None
        return self.validation.message or None

    @property
    def is_checkbox(self) -> bool:
        return self.kind is FieldKind.checkbox


class SectionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section_id: int = Field(alias="sectionId")
    title: str = ""
    description: str = ""
    fields: Tuple[FieldDefinition, ...] = Field(default_factory=tuple)


class FormSchema(BaseModel):
    """Declarative description of a multi-section form.

    Section order is positional: index 0 is the entry point and the last
    section is the only one a form can be submitted from.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default="", alias="formTitle")
    id: str = Field(default="", alias="formId")
    version: str = ""
    sections: Tuple[SectionDefinition, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "FormSchema":
        seen_sections: set[int] = set()
        seen_fields: set[str] = set()
        for section in self.sections:
            if section.section_id in seen_sections:
                raise ValueError(f"duplicate sectionId {section.section_id}")
            seen_sections.add(section.section_id)
            for field in section.fields:
                if field.field_id in seen_fields:
                    raise ValueError(f"duplicate fieldId {field.field_id!r}")
                seen_fields.add(field.field_id)
        return self

    def iter_fields(self) -> Iterator[FieldDefinition]:
        for section in self.sections:
            yield from section.fields

    def find_field(self, field_id: str) -> FieldDefinition | None:
        for field in self.iter_fields():
            if field.field_id == field_id:
                return field
        return None

    @property
    def field_ids(self) -> list[str]:
        return [field.field_id for field in self.iter_fields()]


class FormResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str = ""
    form: FormSchema


__all__ = [
    "FieldKind",
    "FieldOption",
    "FieldValidation",
    "FieldDefinition",
    "SectionDefinition",
    "FormSchema",
    "FormResponse",
    "OPTION_KINDS",
]
