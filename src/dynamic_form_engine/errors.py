from __future__ import annotations


class FormEngineError(Exception):
    """Base class for errors raised across the engine boundary."""


class SchemaError(FormEngineError):
    """The form definition is malformed; no form state may be built from it."""


class UnknownFieldError(FormEngineError, KeyError):
    def __init__(self, field_id: str) -> None:
        super().__init__(field_id)
        self.field_id = field_id

    def __str__(self) -> str:
        return f"Unknown fieldId: {self.field_id}"


class CollaboratorError(FormEngineError):
    """Failure reported by an external service. Safe to retry."""

    retryable = True

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegistrationError(CollaboratorError):
    pass


class AcquisitionError(CollaboratorError):
    pass


__all__ = [
    "FormEngineError",
    "SchemaError",
    "UnknownFieldError",
    "CollaboratorError",
    "RegistrationError",
    "AcquisitionError",
]
