"""Shared fixtures for all tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from dynamic_form_engine.models.schema import FormSchema
from dynamic_form_engine.schema_loader import load_form_response

FIXTURE_DIR = Path(__file__).resolve().parent.parent / "data" / "forms"


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURE_DIR / f"{name}.json").read_text(encoding="utf-8"))


@pytest.fixture()
def form_payload() -> dict[str, Any]:
    """The ``{message, form}`` envelope served by the form service."""
    return load_fixture("student_registration")


@pytest.fixture()
def schema(form_payload) -> FormSchema:
    return load_form_response(form_payload).form


@pytest.fixture()
def two_section_schema() -> dict[str, Any]:
    return {
        "formTitle": "Two step",
        "formId": "two-step",
        "version": "1",
        "sections": [
            {
                "sectionId": 1,
                "title": "About",
                "description": "",
                "fields": [{"fieldId": "name", "type": "text", "label": "Name", "required": True}],
            },
            {
                "sectionId": 2,
                "title": "Contact",
                "description": "",
                "fields": [{"fieldId": "mobile", "type": "tel", "label": "Mobile", "required": False}],
            },
        ],
    }
