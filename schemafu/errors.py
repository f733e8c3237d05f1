"""
Exceptions raised by the schemafu collaborators and stages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .results import SchemaError


class SchemafuError(Exception):
    """Base class for every error raised by schemafu."""


class InputNotFoundError(SchemafuError):
    """The input schema file does not exist."""


class BundleError(SchemafuError):
    """A reference could not be resolved while bundling."""


class SchemaValidationError(SchemafuError):
    """The schema does not conform to its meta-schema.

    Attributes:
        errors: The structured errors reported by the validator, in order.
            ``None`` means validation failed without structured details.
    """

    def __init__(self, message: str, errors: list[SchemaError] | None = None):
        super().__init__(message)
        self.errors = errors


class GenerationError(SchemafuError):
    """The schema could not be compiled to TypeScript."""


class WriteError(SchemafuError):
    """An artifact could not be written to disk."""
