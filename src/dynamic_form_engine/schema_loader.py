from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import SchemaError
from .models.schema import FormResponse, FormSchema

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_schema(raw: FormSchema | Mapping[str, Any] | str | bytes) -> FormSchema:
    """Build a FormSchema from a raw payload or raise SchemaError.

    Args:
        raw: Parsed JSON mapping, JSON text, or an already built schema

    Returns:
        FormSchema instance
    """
    if isinstance(raw, FormSchema):
        return raw
    schema = _validate(FormSchema, raw)
    logger.debug(
        "Loaded form schema",
        extra={
            "form_id": schema.id,
            "version": schema.version,
            "sections_count": len(schema.sections),
            "fields_count": len(schema.field_ids),
        },
    )
    return schema


def load_form_response(raw: Mapping[str, Any] | str | bytes) -> FormResponse:
    """Parse the ``{message, form}`` envelope returned by the form service."""
    return _validate(FormResponse, raw)


def load_schema_file(path: Path) -> FormSchema:
    with path.open("r", encoding="utf-8") as fp:
        try:
            data = json.load(fp)
        except ValueError as exc:
            raise SchemaError(f"{path}: not a JSON document: {exc}") from exc
    # Accept both a bare form and the service envelope.
    if isinstance(data, dict) and "form" in data and "sections" not in data:
        return load_form_response(data).form
    return load_schema(data)


def _validate(model: type[ModelT], raw: Any) -> ModelT:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise SchemaError(f"Form schema is not a JSON document: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise SchemaError(f"Form schema must be a JSON object, got {type(raw).__name__}")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise SchemaError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        problems.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Malformed form schema: " + "; ".join(problems)


__all__ = ["load_schema", "load_form_response", "load_schema_file"]
