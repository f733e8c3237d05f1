"""
Tests for the bundle, validate and generate stage adapters.
"""

import json

import pytest

from schemafu.config import SchemafuConfig
from schemafu.results import BundlePaths, GenericFailure, GeneratePaths, ValidationFailure, ValidationReport
from schemafu.stages import (
    BUNDLE_LABEL,
    GENERATE_LABEL,
    bundle_operation,
    generate_operation,
    validate_operation,
)


class TestBundleOperation:
    @pytest.mark.asyncio
    async def test_default_output(self, schemas_dir, reporter):
        result = await bundle_operation("order.json", reporter=reporter)

        assert result.success
        assert result.data == BundlePaths(
            input_path=str(schemas_dir / "order.json"),
            output_path=str(schemas_dir / "schema.bundled.json"),
        )
        bundled = json.loads((schemas_dir / "schema.bundled.json").read_text())
        assert bundled["properties"]["customer"] == {"$ref": "#/$defs/customer"}
        assert bundled["properties"]["items"]["items"] == {"$ref": "#/$defs/LineItem"}
        assert reporter.events[0] == ("start", BUNDLE_LABEL)
        assert reporter.events[1][0] == "succeed"

    @pytest.mark.asyncio
    async def test_configured_default_output(self, schemas_dir):
        config = SchemafuConfig(output_path="dist/bundle.json")

        result = await bundle_operation("order.json", config=config)

        assert result.data.output_path == str(schemas_dir / "dist" / "bundle.json")
        assert (schemas_dir / "dist" / "bundle.json").exists()

    @pytest.mark.asyncio
    async def test_pretty(self, schemas_dir):
        await bundle_operation("order.json", "pretty.json", pretty=True)

        content = (schemas_dir / "pretty.json").read_text()
        assert content.startswith('{\n  "$schema"')

    @pytest.mark.asyncio
    async def test_compact(self, schemas_dir):
        await bundle_operation("order.json", "compact.json")

        assert "\n" not in (schemas_dir / "compact.json").read_text()

    @pytest.mark.asyncio
    async def test_missing_input(self, schemas_dir, reporter):
        result = await bundle_operation("missing.json", reporter=reporter)

        assert not result.success
        assert isinstance(result.error, GenericFailure)
        assert result.message.startswith("Input file does not exist")
        assert reporter.events[-1] == ("fail", BUNDLE_LABEL)


class TestValidateOperation:
    @pytest.mark.asyncio
    async def test_valid(self, schemas_dir):
        result = await validate_operation("customer.json", strict=True)

        assert result.success
        assert result.data == ValidationReport(valid=True, errors=None)

    @pytest.mark.asyncio
    async def test_strict_unknown_keyword(self, schemas_dir):
        result = await validate_operation("unknown_keyword.json", strict=True)

        assert not result.success
        assert result.message == "Schema validation failed"
        assert isinstance(result.error, ValidationFailure)
        assert [error.instance_path for error in result.error.errors] == ["/properties/name"]

    @pytest.mark.asyncio
    async def test_lenient_unknown_keyword(self, schemas_dir):
        result = await validate_operation("unknown_keyword.json")

        assert result.success

    @pytest.mark.asyncio
    async def test_unreadable_file(self, schemas_dir):
        (schemas_dir / "broken.json").write_text("{")

        result = await validate_operation("broken.json")

        assert isinstance(result.error, GenericFailure)
        assert result.message.startswith("Failed to validate schema")


class TestGenerateOperation:
    @pytest.mark.asyncio
    async def test_default_output(self, schemas_dir, reporter):
        result = await generate_operation("customer.json", reporter=reporter)

        assert result.success
        assert result.data == GeneratePaths(
            schema_path=str(schemas_dir / "customer.json"),
            output_path=str(schemas_dir / "customer.d.ts"),
        )
        code = (schemas_dir / "customer.d.ts").read_text()
        assert code.startswith("/* Generated from customer.json */")
        assert "\n  name: string;\n" in code
        assert reporter.events[0] == ("start", GENERATE_LABEL)

    @pytest.mark.asyncio
    async def test_indentation_from_config(self, schemas_dir):
        await generate_operation("customer.json", "out.ts", config=SchemafuConfig(indentation=4))

        assert "\n    name: string;\n" in (schemas_dir / "out.ts").read_text()

    @pytest.mark.asyncio
    async def test_explicit_indent_and_banner(self, schemas_dir):
        await generate_operation("customer.json", "out.ts", indent=3, banner="/* banner */")

        code = (schemas_dir / "out.ts").read_text()
        assert code.startswith("/* banner */")
        assert "\n   name: string;\n" in code

    @pytest.mark.asyncio
    async def test_unsupported_construct(self, schemas_dir):
        (schemas_dir / "bad.json").write_text(json.dumps({"properties": {"a": {"type": "strng"}}}))

        result = await generate_operation("bad.json")

        assert not result.success
        assert result.message.startswith("Failed to generate TypeScript")
        assert not (schemas_dir / "bad.d.ts").exists()


@pytest.mark.asyncio
async def test_generate_reports_malformed_schema(schemas_dir):
    (schemas_dir / "malformed.json").write_text(
        json.dumps({"type": "object", "required": True, "properties": {"a": {"type": "string"}}})
    )

    result = await generate_operation("malformed.json")

    assert isinstance(result.error, GenericFailure)
    assert result.message.startswith("Failed to generate TypeScript")


@pytest.mark.asyncio
async def test_validate_reports_non_string_dialect(schemas_dir):
    (schemas_dir / "dialect.json").write_text(json.dumps({"$schema": 5, "type": "object"}))

    result = await validate_operation("dialect.json")

    assert isinstance(result.error, ValidationFailure)
    assert [error.instance_path for error in result.error.errors] == ["/$schema"]
