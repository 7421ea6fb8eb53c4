import json
from pathlib import Path

import pytest

from dynamic_form_engine.errors import SchemaError
from dynamic_form_engine.models.schema import FieldKind
from dynamic_form_engine.schema_loader import load_form_response, load_schema, load_schema_file

FIXTURE_DIR = Path(__file__).resolve().parent.parent / "data" / "forms"


def test_fixture_parses_with_wire_names(schema):
    assert schema.title == "Student Information Form"
    assert schema.id == "student-info-v1"
    assert [section.section_id for section in schema.sections] == [1, 2, 3]

    first_name = schema.find_field("firstName")
    assert first_name.kind is FieldKind.text
    assert first_name.validation_message == "First name is required"
    assert first_name.min_length == 2
    assert first_name.placeholder == "Enter your first name"

    course = schema.find_field("course")
    assert [option.value for option in course.options] == ["cse", "ece"]
    assert course.options[0].data_test_id == "course-cse"


def test_envelope_keeps_message(form_payload):
    response = load_form_response(form_payload)
    assert response.message == "Form retrieved successfully"


def test_accepts_json_text(two_section_schema):
    schema = load_schema(json.dumps(two_section_schema))
    assert schema.field_ids == ["name", "mobile"]


def test_flat_validation_message_is_accepted(two_section_schema):
    two_section_schema["sections"][0]["fields"][0]["validationMessage"] = "Tell us your name"
    schema = load_schema(two_section_schema)
    assert schema.find_field("name").validation_message == "Tell us your name"


def test_load_schema_file_reads_envelope():
    schema = load_schema_file(FIXTURE_DIR / "student_registration.json")
    assert len(schema.sections) == 3


@pytest.mark.parametrize(
    "mutate",
    [
        lambda raw: raw.pop("sections"),
        lambda raw: raw.update(sections=[]),
        lambda raw: raw["sections"][1]["fields"][0].update(fieldId="name"),
        lambda raw: raw["sections"][1].update(sectionId=1),
        lambda raw: raw["sections"][0]["fields"][0].update(type="slider"),
        lambda raw: raw["sections"][0]["fields"][0].update(type="dropdown"),
        lambda raw: raw["sections"][0]["fields"][0].update(type="radio", options=[]),
        lambda raw: raw["sections"][0]["fields"][0].update(minLength=-1),
        lambda raw: raw["sections"][0]["fields"][0].pop("fieldId"),
    ],
    ids=[
        "missing-sections",
        "empty-sections",
        "duplicate-field-id-across-sections",
        "duplicate-section-id",
        "unknown-kind",
        "dropdown-without-options",
        "radio-with-empty-options",
        "negative-min-length",
        "missing-field-id",
    ],
)
def test_malformed_schema_raises(two_section_schema, mutate):
    mutate(two_section_schema)
    with pytest.raises(SchemaError):
        load_schema(two_section_schema)


def test_non_object_payload_raises():
    with pytest.raises(SchemaError):
        load_schema("[1, 2, 3]")
    with pytest.raises(SchemaError):
        load_schema("{not json")


def test_undecodable_bytes_raise_schema_error(tmp_path):
    with pytest.raises(SchemaError):
        load_schema(b'{"sections": "\xff"}')

    path = tmp_path / "form.json"
    path.write_bytes(b'{"sections": "\xff"}')
    with pytest.raises(SchemaError):
        load_schema_file(path)


def test_sections_cannot_be_changed_in_place(two_section_schema):
    sections = two_section_schema["sections"]
    schema = load_schema(two_section_schema)
    sections.clear()

    assert isinstance(schema.sections, tuple)
    assert isinstance(schema.sections[0].fields, tuple)
    assert len(schema.sections) == 2


def test_envelope_without_form_raises():
    with pytest.raises(SchemaError):
        load_form_response({"message": "ok"})


def test_schema_is_immutable(schema):
    with pytest.raises(Exception):
        schema.title = "changed"
