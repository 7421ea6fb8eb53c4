from __future__ import annotations

from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field

FieldValue = Union[bool, str]


class FormState(BaseModel):
    """Observable snapshot handed to the presentation layer."""

    model_config = ConfigDict(populate_by_name=True)

    values: Dict[str, FieldValue] = Field(default_factory=dict)
    errors: Dict[str, str] = Field(default_factory=dict)
    current_section_index: int = Field(default=0, alias="currentSectionIndex", ge=0)
    is_submitted: bool = Field(default=False, alias="isSubmitted")


class Progress(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section_number: int = Field(alias="sectionNumber")
    section_count: int = Field(alias="sectionCount")
    percent: float
    is_first_section: bool = Field(alias="isFirstSection")
    is_last_section: bool = Field(alias="isLastSection")

    @property
    def label(self) -> str:
        return f"Section {self.section_number} of {self.section_count}"


__all__ = ["FormState", "FieldValue", "Progress"]
