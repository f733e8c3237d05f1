"""
Default artifact locations.
"""

from __future__ import annotations

import os

from .config import SchemafuConfig

JSON_SUFFIX = ".json"
DECLARATION_SUFFIX = ".d.ts"


def resolve_path(path: str, cwd: str | None = None) -> str:
    """Resolve a path against the working directory; absolute paths pass through."""
    if os.path.isabs(path):
        return path
    base = cwd if cwd is not None else os.getcwd()
    return os.path.normpath(os.path.join(base, path))


def bundle_output_path(output: str | None, config: SchemafuConfig, cwd: str | None = None) -> str:
    """Where the bundle stage writes: the explicit output, else the configured default."""
    return resolve_path(output if output else config.output_path, cwd)


def declaration_path(schema_path: str) -> str:
    """Rewrite a trailing ".json" to ".d.ts"; other paths are returned unchanged."""
    if schema_path.endswith(JSON_SUFFIX):
        return schema_path[: -len(JSON_SUFFIX)] + DECLARATION_SUFFIX
    return schema_path


def generate_output_path(schema_path: str, output: str | None, cwd: str | None = None) -> str:
    """Where the generate stage writes: the explicit output, else next to the schema."""
    if output:
        return resolve_path(output, cwd)
    return declaration_path(schema_path)
