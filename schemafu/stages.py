"""
Stage adapters.

Each adapter resolves the stage's paths, runs its collaborator off the event
loop through run_operation and returns the stage's OperationResult.
"""

from __future__ import annotations

import asyncio
from typing import Any

from .bundler import bundle_schema
from .config import SchemafuConfig
from .errors import GenerationError, SchemafuError, SchemaValidationError
from .file_utils import read_json_file, write_json_file, write_text_file
from .generator import generate_typescript
from .paths import bundle_output_path, generate_output_path, resolve_path
from .results import BundlePaths, GeneratePaths, OperationResult, ValidationReport
from .runner import ReportingPort, run_operation
from .validator import validate_schema

BUNDLE_LABEL = "Bundling schema"
VALIDATE_LABEL = "Validating schema"
GENERATE_LABEL = "Generating TypeScript interfaces"


async def bundle_operation(
    input: str,
    output: str | None = None,
    pretty: bool = False,
    *,
    config: SchemafuConfig | None = None,
    reporter: ReportingPort | None = None,
) -> OperationResult[BundlePaths]:
    """Bundle input into output, or into the configured default output path."""
    config = config or SchemafuConfig()
    input_path = resolve_path(input)
    output_path = bundle_output_path(output, config)

    async def operation() -> BundlePaths:
        document = await asyncio.to_thread(bundle_schema, input_path)
        await asyncio.to_thread(write_json_file, output_path, document, pretty)
        return BundlePaths(input_path=input_path, output_path=output_path)

    return await run_operation(BUNDLE_LABEL, operation, reporter)


def _validate_file(schema_path: str, strict: bool) -> ValidationReport:
    try:
        document = read_json_file(schema_path)
    except (OSError, ValueError) as e:
        raise SchemafuError(f"Failed to validate schema: {e}") from e
    return validate_schema(document, strict=strict)


async def validate_operation(
    input: str,
    strict: bool = False,
    *,
    reporter: ReportingPort | None = None,
) -> OperationResult[ValidationReport]:
    """Validate the schema file at input against its meta-schema."""
    schema_path = resolve_path(input)

    async def operation() -> ValidationReport:
        report = await asyncio.to_thread(_validate_file, schema_path, strict)
        if not report.valid:
            errors = list(report.errors) if report.errors is not None else None
            raise SchemaValidationError("Schema validation failed", errors)
        return report

    return await run_operation(VALIDATE_LABEL, operation, reporter)


def _generate_file(schema_path: str, output_path: str, options: dict[str, Any]) -> None:
    try:
        schema = read_json_file(schema_path)
        typescript = generate_typescript(schema, schema_path, **options)
    except (OSError, ValueError, GenerationError) as e:
        raise GenerationError(f"Failed to generate TypeScript: {e}") from e
    write_text_file(output_path, typescript)


async def generate_operation(
    input: str,
    output: str | None = None,
    strict: bool = False,
    indent: int | None = None,
    banner: str | None = None,
    *,
    config: SchemafuConfig | None = None,
    reporter: ReportingPort | None = None,
) -> OperationResult[GeneratePaths]:
    """Generate TypeScript declarations for the schema at input.

    Without an explicit output the declarations are written next to the
    schema, with ".json" replaced by ".d.ts".
    """
    config = config or SchemafuConfig()
    schema_path = resolve_path(input)
    output_path = generate_output_path(schema_path, output)
    options = {
        "strict_types": strict,
        "indentation": indent if indent is not None else config.indentation,
        "banner": banner,
    }

    async def operation() -> GeneratePaths:
        await asyncio.to_thread(_generate_file, schema_path, output_path, options)
        return GeneratePaths(schema_path=schema_path, output_path=output_path)

    return await run_operation(GENERATE_LABEL, operation, reporter)
