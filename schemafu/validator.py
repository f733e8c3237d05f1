"""
Validation of a schema document against its meta-schema.

The dialect comes from the document's ``$schema`` (Draft 2020-12 when absent)
and every violation is collected. Strict mode also rejects keywords that no
JSON Schema vocabulary defines, which the meta-schemas otherwise allow.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

import jsonschema
from jsonschema.exceptions import SchemaError as MetaSchemaError
from jsonschema.exceptions import UnknownType

from .results import SchemaError, ValidationReport

log = logging.getLogger(__name__)

KNOWN_KEYWORDS = frozenset(
    {
        # core
        "$schema", "$id", "$ref", "$anchor", "$dynamicRef", "$dynamicAnchor",
        "$recursiveRef", "$recursiveAnchor", "$vocabulary", "$comment", "$defs", "definitions",
        # applicators
        "allOf", "anyOf", "oneOf", "not", "if", "then", "else", "dependentSchemas",
        "prefixItems", "items", "additionalItems", "contains", "properties",
        "patternProperties", "additionalProperties", "propertyNames", "dependencies",
        "unevaluatedItems", "unevaluatedProperties",
        # validation
        "type", "enum", "const", "multipleOf", "maximum", "exclusiveMaximum", "minimum",
        "exclusiveMinimum", "maxLength", "minLength", "pattern", "maxItems", "minItems",
        "uniqueItems", "maxContains", "minContains", "maxProperties", "minProperties",
        "required", "dependentRequired",
        # format, content and meta-data
        "format", "contentEncoding", "contentMediaType", "contentSchema",
        "title", "description", "default", "deprecated", "readOnly", "writeOnly", "examples",
    }
)  # fmt: skip

# Keywords whose value is a single subschema
_SCHEMA_KEYWORDS = (
    "additionalItems", "additionalProperties", "contains", "contentSchema", "else", "if",
    "not", "propertyNames", "then", "unevaluatedItems", "unevaluatedProperties",
)  # fmt: skip

# Keywords whose value maps names to subschemas
_SCHEMA_MAP_KEYWORDS = ("$defs", "definitions", "dependentSchemas", "patternProperties", "properties")

# Keywords whose value is a list of subschemas
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf", "prefixItems")


def _escape(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def to_json_pointer(path: Iterable[Any]) -> str:
    """Build a JSON pointer ("" for the root) from path segments."""
    return "".join(f"/{_escape(token)}" for token in path)


def iter_unknown_keywords(schema: Any, path: tuple = ()) -> Iterator[SchemaError]:
    """Yield one error per keyword outside the known vocabularies, depth first."""
    if not isinstance(schema, dict):
        return

    for key in schema:
        if key not in KNOWN_KEYWORDS:
            yield SchemaError(to_json_pointer(path), f'strict mode: unknown keyword: "{key}"')

    for key in _SCHEMA_KEYWORDS:
        if key in schema:
            yield from iter_unknown_keywords(schema[key], path + (key,))
    for key in _SCHEMA_MAP_KEYWORDS:
        value = schema.get(key)
        if isinstance(value, dict):
            for name, subschema in value.items():
                yield from iter_unknown_keywords(subschema, path + (key, name))
    for key in _SCHEMA_LIST_KEYWORDS:
        value = schema.get(key)
        if isinstance(value, list):
            for i, subschema in enumerate(value):
                yield from iter_unknown_keywords(subschema, path + (key, i))

    items = schema.get("items")
    if isinstance(items, list):
        for i, subschema in enumerate(items):
            yield from iter_unknown_keywords(subschema, path + ("items", i))
    elif items is not None:
        yield from iter_unknown_keywords(items, path + ("items",))


def validate_schema(document: Any, strict: bool = False) -> ValidationReport:
    """
    Check a schema document against its meta-schema.

    Args:
        document: The parsed schema
        strict: Also report keywords no vocabulary defines

    Returns:
        ValidationReport; errors is None when the document is valid
    """
    validator_cls = jsonschema.Draft202012Validator
    if isinstance(document, dict):
        dialect = document.get("$schema")
        if dialect is not None and not isinstance(dialect, str):
            return ValidationReport(valid=False, errors=(SchemaError("/$schema", "must be string"),))
        validator_cls = jsonschema.validators.validator_for(document, default=validator_cls)
    meta_validator = validator_cls(validator_cls.META_SCHEMA)

    try:
        errors = [
            SchemaError(to_json_pointer(error.absolute_path), error.message)
            for error in sorted(meta_validator.iter_errors(document), key=lambda e: list(map(str, e.absolute_path)))
        ]
    except (MetaSchemaError, UnknownType) as e:
        log.debug("Meta-schema validation raised %r", e)
        return ValidationReport(valid=False, errors=(SchemaError("", str(e)),))

    if strict:
        errors.extend(iter_unknown_keywords(document))

    log.debug("Validated schema with %s: %d errors", validator_cls.__name__, len(errors))
    if errors:
        return ValidationReport(valid=False, errors=tuple(errors))
    return ValidationReport(valid=True, errors=None)
