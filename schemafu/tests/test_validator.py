"""
Tests for meta-schema validation.
"""

import pytest

from schemafu.results import SchemaError
from schemafu.validator import iter_unknown_keywords, to_json_pointer, validate_schema


def test_valid_schema():
    schema = {"type": "object", "properties": {"name": {"type": "string"}}, "required": ["name"]}
    report = validate_schema(schema)
    assert report.valid
    assert report.errors is None


def test_invalid_type_name():
    report = validate_schema({"type": "strng"})
    assert not report.valid
    assert [error.instance_path for error in report.errors] == ["/type"]
    assert report.errors[0].message


def test_nested_error_location():
    report = validate_schema({"properties": {"name": {"type": 5}}})
    assert not report.valid
    assert "/properties/name/type" in {error.instance_path for error in report.errors}


def test_all_errors_are_collected():
    report = validate_schema({"type": "strng", "required": "name"})
    assert {error.instance_path for error in report.errors} == {"/type", "/required"}


def test_unknown_keyword_allowed_without_strict():
    report = validate_schema({"properties": {"name": {"type": "string", "foo": 1}}})
    assert report.valid


def test_unknown_keyword_rejected_with_strict():
    report = validate_schema({"properties": {"name": {"type": "string", "foo": 1}}}, strict=True)
    assert not report.valid
    assert report.errors == (SchemaError("/properties/name", 'strict mode: unknown keyword: "foo"'),)


def test_draft_07_dialect():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "definitions": {"Id": {"type": "string"}},
        "properties": {"id": {"$ref": "#/definitions/Id"}},
    }
    assert validate_schema(schema, strict=True).valid


def test_boolean_schema():
    assert validate_schema(True).valid


def test_non_schema_document():
    report = validate_schema([1, 2])
    assert not report.valid
    assert report.errors[0].instance_path == ""


@pytest.mark.parametrize(
    "path, pointer",
    [
        ((), ""),
        (("properties", "name"), "/properties/name"),
        (("items", 0), "/items/0"),
        (("properties", "a/b~c"), "/properties/a~1b~0c"),
    ],
)
def test_to_json_pointer(path, pointer):
    assert to_json_pointer(path) == pointer


def test_unknown_keywords_in_every_subschema():
    schema = {
        "bogus": 1,
        "items": [{"x": 1}],
        "anyOf": [{"type": "string", "y": 2}],
        "additionalProperties": {"z": 3},
        "$defs": {"A": {"w": 4}},
    }
    assert {(error.instance_path, error.message.split('"')[1]) for error in iter_unknown_keywords(schema)} == {
        ("", "bogus"),
        ("/items/0", "x"),
        ("/anyOf/0", "y"),
        ("/additionalProperties", "z"),
        ("/$defs/A", "w"),
    }


@pytest.mark.parametrize("dialect", [5, ["x"], {"uri": "x"}])
def test_non_string_dialect(dialect):
    report = validate_schema({"$schema": dialect, "type": "object"})
    assert not report.valid
    assert report.errors == (SchemaError("/$schema", "must be string"),)
