"""
TypeScript declaration generator.

Compiles a bundled JSON Schema into TypeScript declarations: an exported
interface per object schema, a type alias for everything else. Nested object
schemas with properties get their own interface named after their parent.
Only local references are supported, so external references must be bundled
first.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import jinja2

from .errors import GenerationError

log = logging.getLogger(__name__)

CURRENT_DIR = Path(__file__).parent.resolve().absolute()

DEFAULT_ROOT_NAME = "Schema"

PRIMITIVE_TYPES = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}

_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")
_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def to_type_name(text: str) -> str:
    """Convert a title or definition name to a PascalCase TypeScript identifier.

    Examples:
        "user_profile" -> "UserProfile"
        "orderItem" -> "OrderItem"
        "3d point" -> "T3DPoint"
    """
    words = _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))
    name = "".join(word[0].upper() + word[1:] for word in words)
    if not name:
        return DEFAULT_ROOT_NAME
    if name[0].isdigit():
        name = "T" + name
    return name


def ts_literal(value: Any) -> str:
    """Render a JSON value usable in a literal type."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return "unknown"


def property_name(name: str) -> str:
    if _IDENTIFIER_PATTERN.match(name):
        return name
    return ts_literal(name)


def _description_lines(schema: Any) -> list[str]:
    if not isinstance(schema, dict):
        return []
    description = schema.get("description")
    if not isinstance(description, str) or not description.strip():
        return []
    return [line.replace("*/", "*\\/").rstrip() for line in description.strip().splitlines()]


def _wrap(type_expr: str) -> str:
    """Parenthesize compound types used as an array element."""
    if " | " in type_expr or " & " in type_expr:
        return f"({type_expr})"
    return type_expr


class TypeScriptGenerator:
    """Generates TypeScript declarations from one JSON schema document."""

    def __init__(
        self,
        schema: Any,
        schema_name: str = "",
        strict_types: bool = False,
        indentation: int = 2,
        banner: str | None = None,
    ):
        """
        Args:
            schema: The (bundled) schema document
            schema_name: File name of the schema, used by the default banner
            strict_types: Type index signatures as possibly undefined
            indentation: Spaces per indentation level
            banner: Comment placed at the top of the output
        """
        self.schema = schema
        self.strict_types = strict_types
        self.indent = " " * indentation
        self.banner = banner or f"/* Generated from {schema_name or 'schema'} */"

        self.jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
        self.prefix = self._load_template("prefix")
        self.interface_template = self._load_template("interface")
        self.alias_template = self._load_template("alias")

        self._declarations: list[str] = []
        self._used_names: set[str] = set()
        self._definition_names: dict[str, str] = {}

    def _load_template(self, kind: str) -> jinja2.Template:
        with open(CURRENT_DIR / f"templates/typescript/{kind}.ts.jinja2", encoding="utf-8") as f:
            return self.jinja_env.from_string(f.read())

    def generate(self) -> str:
        """
        Compile the schema.

        Returns:
            The TypeScript source text

        Raises:
            GenerationError: On an unsupported type or an unresolvable reference
        """
        if not isinstance(self.schema, (dict, bool)):
            raise GenerationError(f"Schema must be an object or a boolean, got {type(self.schema).__name__}")

        root_title = self.schema.get("title") if isinstance(self.schema, dict) else None
        self.root_name = self._claim_name(to_type_name(root_title) if isinstance(root_title, str) else DEFAULT_ROOT_NAME)

        definitions = self._collect_definitions()
        for key, name in definitions.items():
            self._definition_names[key] = self._claim_name(name)

        self._declare(self.root_name, self.schema)
        for key, definition in self._iter_definitions():
            self._declare(self._definition_names[key], definition)

        log.debug("Generated %d declarations for %s", len(self._declarations), self.root_name)
        prefix = self.prefix.render(banner=self.banner).rstrip("\n")
        return prefix + "\n\n" + "\n\n".join(self._declarations) + "\n"

    def _iter_definitions(self):
        if not isinstance(self.schema, dict):
            return
        for container in ("$defs", "definitions"):
            defs = self.schema.get(container)
            if isinstance(defs, dict):
                for def_name, definition in defs.items():
                    yield f"#/{container}/{def_name}", definition

    def _collect_definitions(self) -> dict[str, str]:
        return {key: to_type_name(key.rsplit("/", 1)[-1]) for key, _ in self._iter_definitions()}

    def _claim_name(self, name: str) -> str:
        candidate = name
        index = 1
        while candidate in self._used_names:
            index += 1
            candidate = f"{name}{index}"
        self._used_names.add(candidate)
        return candidate

    def _is_interface(self, schema: Any) -> bool:
        if not isinstance(schema, dict):
            return False
        if any(key in schema for key in ("$ref", "anyOf", "oneOf", "allOf", "enum", "const")):
            return False
        schema_type = schema.get("type")
        return schema_type == "object" or (schema_type is None and "properties" in schema)

    def _declare(self, name: str, schema: Any) -> None:
        if self._is_interface(schema):
            self._declare_interface(name, schema)
        else:
            type_expr = self._type_of(schema, name)
            self._declarations.append(
                self.alias_template.render(
                    name=name,
                    type=type_expr,
                    description=_description_lines(schema),
                )
            )

    def _declare_interface(self, name: str, schema: dict) -> None:
        # Reserve the slot so that nested interfaces follow their parent
        slot = len(self._declarations)
        self._declarations.append("")

        required_names = schema.get("required") or []
        if not isinstance(required_names, list):
            raise GenerationError(f"'required' of {name} must be an array")
        schema_properties = schema.get("properties") or {}
        if not isinstance(schema_properties, dict):
            raise GenerationError(f"'properties' of {name} must be an object")

        required = set(required_names)
        properties = []
        for prop_name, prop_schema in schema_properties.items():
            properties.append(
                {
                    "name": property_name(prop_name),
                    "optional": prop_name not in required,
                    "type": self._type_of(prop_schema, name + to_type_name(prop_name)),
                    "description": _description_lines(prop_schema),
                }
            )

        self._declarations[slot] = self.interface_template.render(
            name=name,
            properties=properties,
            index_signature=self._index_signature(schema, name),
            description=_description_lines(schema),
            indent=self.indent,
        )

    def _index_signature(self, schema: dict, name: str) -> str | None:
        additional = schema.get("additionalProperties", True)
        if additional is False:
            return None
        value_type = "unknown" if additional is True else self._type_of(additional, name + "Value")
        if self.strict_types:
            return f"{value_type} | undefined"
        return value_type

    def _type_of(self, schema: Any, hint_name: str) -> str:
        """Return the type expression of a schema, declaring nested interfaces as needed."""
        if schema is True:
            return "unknown"
        if schema is False:
            return "never"
        if not isinstance(schema, dict):
            raise GenerationError(f"Invalid schema for {hint_name}: {schema!r}")

        if "$ref" in schema:
            return self._resolve_ref(schema["$ref"])
        if "const" in schema:
            return ts_literal(schema["const"])
        if "enum" in schema:
            if not isinstance(schema["enum"], list) or not schema["enum"]:
                raise GenerationError(f"Invalid enum for {hint_name}")
            return " | ".join(ts_literal(value) for value in schema["enum"])
        for keyword in ("anyOf", "oneOf"):
            if keyword in schema:
                if not isinstance(schema[keyword], list):
                    raise GenerationError(f"'{keyword}' of {hint_name} must be an array")
                members = [self._type_of(sub, f"{hint_name}{i}") for i, sub in enumerate(schema[keyword])]
                return " | ".join(dict.fromkeys(members))
        if "allOf" in schema:
            if not isinstance(schema["allOf"], list):
                raise GenerationError(f"'allOf' of {hint_name} must be an array")
            members = [self._type_of(sub, f"{hint_name}{i}") for i, sub in enumerate(schema["allOf"])]
            return " & ".join(_wrap(member) for member in dict.fromkeys(members))

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            return " | ".join(self._type_of({**schema, "type": t}, hint_name) for t in schema_type)
        if schema_type is None:
            if "properties" in schema:
                schema_type = "object"
            elif "items" in schema or "prefixItems" in schema:
                schema_type = "array"
            else:
                return "unknown"

        if schema_type == "object":
            if schema.get("properties"):
                nested_name = self._claim_name(hint_name)
                self._declare_interface(nested_name, schema)
                return nested_name
            additional = schema.get("additionalProperties", True)
            if additional is False:
                return "{}"
            value_type = "unknown" if additional is True else self._type_of(additional, hint_name + "Value")
            return f"{{ [k: string]: {value_type} }}"
        if schema_type == "array":
            return self._array_type(schema, hint_name)
        if schema_type in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[schema_type]
        raise GenerationError(f"Unsupported type '{schema_type}' for {hint_name}")

    def _array_type(self, schema: dict, hint_name: str) -> str:
        tuple_items = schema.get("prefixItems")
        if tuple_items is None and isinstance(schema.get("items"), list):
            tuple_items = schema["items"]
        if tuple_items is not None:
            members = [self._type_of(sub, f"{hint_name}{i}") for i, sub in enumerate(tuple_items)]
            return f"[{', '.join(members)}]"
        items = schema.get("items", True)
        return f"{_wrap(self._type_of(items, hint_name + 'Item'))}[]"

    def _resolve_ref(self, ref: str) -> str:
        if ref == "#":
            return self.root_name
        if ref in self._definition_names:
            return self._definition_names[ref]
        raise GenerationError(f"Cannot resolve reference '{ref}'")


def generate_typescript(
    schema: Any,
    schema_path: str = "",
    strict_types: bool = False,
    indentation: int = 2,
    banner: str | None = None,
) -> str:
    """
    Compile a schema document to TypeScript declarations.

    Args:
        schema: The parsed schema
        schema_path: Path the schema was read from, named in the default banner
        strict_types: Type index signatures as possibly undefined
        indentation: Spaces per indentation level
        banner: Comment placed at the top of the output

    Returns:
        The TypeScript source text
    """
    generator = TypeScriptGenerator(
        schema,
        schema_name=os.path.basename(schema_path),
        strict_types=strict_types,
        indentation=indentation,
        banner=banner,
    )
    return generator.generate()
