"""
Configuration for a schemafu run.

``SchemafuConfig`` carries the tool-wide defaults and is passed explicitly to
whatever needs them. ``PipelineOptions`` is the per-invocation snapshot of the
``process`` command's options.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_OUTPUT_PATH = "schema.bundled.json"
DEFAULT_INDENTATION = 2


@dataclass
class SchemafuConfig:
    """Defaults shared by the stages."""

    # Where the bundle stage writes when no --output is given (relative to cwd)
    output_path: str = DEFAULT_OUTPUT_PATH

    # Indentation of generated TypeScript when no --indent is given
    indentation: int = DEFAULT_INDENTATION

    @staticmethod
    def from_dict(d: dict) -> SchemafuConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = SchemafuConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    @staticmethod
    def from_file(path: str | Path) -> SchemafuConfig:
        """Load a config from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return SchemafuConfig.from_dict(json.load(f))

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class PipelineOptions:
    """Options of one ``process`` invocation."""

    output: str | None = None
    pretty: bool = False
    strict: bool = False
    indent: int | None = None
    banner: str | None = None
    skip_validation: bool = False
    skip_generation: bool = False
