"""
Result types shared by the runner, the stages and the reporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SchemaError:
    """One meta-schema violation.

    Attributes:
        instance_path: JSON pointer to the offending location ("" is the document root)
        message: Human readable description, if the validator gave one
    """

    instance_path: str = ""
    message: str | None = None


@dataclass(frozen=True)
class GenericFailure:
    """A stage failed for a reason other than schema validation."""

    message: str
    exception: BaseException | None = None


@dataclass(frozen=True)
class ValidationFailure:
    """Schema validation failed.

    ``errors`` may be ``None`` or empty when the validator could not provide
    structured details; the failure is still a validation failure.
    """

    message: str
    errors: tuple[SchemaError, ...] | None = None
    exception: BaseException | None = None


Failure = GenericFailure | ValidationFailure


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of one timed operation.

    A successful result never carries an error and a failed one never carries data.
    """

    success: bool
    message: str
    duration_ms: int
    data: T | None = None
    error: Failure | None = None

    def __post_init__(self):
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("A failed result must carry an error and no data")


@dataclass(frozen=True)
class BundlePaths:
    """Payload of the bundle stage."""

    input_path: str
    output_path: str


@dataclass(frozen=True)
class GeneratePaths:
    """Payload of the generate stage."""

    schema_path: str
    output_path: str


@dataclass(frozen=True)
class ValidationReport:
    """What the validator returns, and the payload of the validate stage."""

    valid: bool
    errors: tuple[SchemaError, ...] | None = None
