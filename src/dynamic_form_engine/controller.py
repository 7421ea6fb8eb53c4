from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .errors import UnknownFieldError
from .models.schema import FieldDefinition, FormSchema, SectionDefinition
from .models.state import FieldValue, FormState, Progress
from .navigation import SectionNavigator
from .schema_loader import load_schema
from .validator import validate_section
from .value_store import clear_error, initialize_values, set_value

logger = logging.getLogger(__name__)

SubmitHandler = Callable[[FormSchema, Mapping[str, FieldValue]], None]


def log_submission(schema: FormSchema, values: Mapping[str, FieldValue]) -> None:
    logger.info("Submitted form values", extra={"form_id": schema.id, "values": dict(values)})


class FormController:
    """Owns the state of one form fill-in and the rules for changing it.

    Every operation returns a snapshot of the observable state; the
    controller's own state is only reachable through these operations.
    """

    def __init__(
        self,
        schema: FormSchema,
        *,
        strict_fields: bool = False,
        on_submit: SubmitHandler | None = None,
    ) -> None:
        self._schema = schema
        self._fields: dict[str, FieldDefinition] = {field.field_id: field for field in schema.iter_fields()}
        self._navigator = SectionNavigator(len(schema.sections))
        self._strict_fields = strict_fields
        self._on_submit = on_submit or log_submission
        self._state = FormState(values=initialize_values(schema))

    @classmethod
    def load_schema(
        cls,
        raw: FormSchema | Mapping[str, Any] | str | bytes,
        *,
        strict_fields: bool = False,
        on_submit: SubmitHandler | None = None,
    ) -> "FormController":
        """Build a controller from a raw schema payload.

        Raises:
            SchemaError: the payload is not a well-formed form definition
        """
        schema = load_schema(raw)
        controller = cls(schema, strict_fields=strict_fields, on_submit=on_submit)
        logger.info(
            "Form state initialized",
            extra={"form_id": schema.id, "sections_count": len(schema.sections)},
        )
        return controller

    @property
    def schema(self) -> FormSchema:
        return self._schema

    @property
    def state(self) -> FormState:
        return self._state.model_copy(deep=True)

    @property
    def current_section(self) -> SectionDefinition:
        return self._schema.sections[self._state.current_section_index]

    @property
    def progress(self) -> Progress:
        return self._navigator.progress(self._state.current_section_index)

    @property
    def is_submitted(self) -> bool:
        return self._state.is_submitted

    def set_value(self, field_id: str, value: FieldValue) -> FormState:
        """Record a new value and drop that field's stale error.

        Unknown field ids are ignored unless the controller was built with
        ``strict_fields=True``, in which case UnknownFieldError is raised.
        """
        if self._finished("set_value"):
            return self.state
        if field_id not in self._fields:
            if self._strict_fields:
                raise UnknownFieldError(field_id)
            logger.debug("Ignoring value for unknown field", extra={"field_id": field_id})
            return self.state

        self._state.values = set_value(self._state.values, field_id, value)
        self._state.errors = clear_error(self._state.errors, field_id)
        return self.state

    def go_next(self) -> FormState:
        if self._finished("go_next"):
            return self.state
        if self._validate_current_section():
            self._state.current_section_index = self._navigator.next_index(self._state.current_section_index)
        return self.state

    def go_previous(self) -> FormState:
        if self._finished("go_previous"):
            return self.state
        self._state.current_section_index = self._navigator.previous_index(self._state.current_section_index)
        return self.state

    def submit(self) -> FormState:
        if self._finished("submit"):
            return self.state
        index = self._state.current_section_index
        if not self._navigator.is_terminal(index):
            logger.warning(
                "Submit attempted before the last section",
                extra={"form_id": self._schema.id, "section_index": index},
            )
            return self.state
        if not self._validate_current_section():
            return self.state

        # A failing sink leaves the form open so the submit can be retried.
        self._on_submit(self._schema, dict(self._state.values))
        self._state.is_submitted = True
        return self.state

    def _validate_current_section(self) -> bool:
        section = self.current_section
        result = validate_section(section, self._state.values)
        # Full revalidation: the previous error map is replaced, not merged.
        self._state.errors = dict(result.errors_by_field_id)
        if not result.is_valid:
            logger.info(
                "Section failed validation",
                extra={
                    "form_id": self._schema.id,
                    "section_id": section.section_id,
                    "failed_fields": sorted(result.errors_by_field_id),
                },
            )
        return result.is_valid

    def _finished(self, operation: str) -> bool:
        if self._state.is_submitted:
            logger.debug("Form already submitted; ignoring operation", extra={"operation": operation})
            return True
        return False


__all__ = ["FormController", "SubmitHandler", "log_submission"]
