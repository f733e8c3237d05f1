"""
Classification of stage failures and rendering of schema errors.
"""

from __future__ import annotations

from collections.abc import Sequence

from .errors import SchemaValidationError
from .results import Failure, GenericFailure, SchemaError, ValidationFailure

NO_ERRORS = "No errors"
UNKNOWN_ERROR = "Unknown error"


def failure_from_exception(exc: BaseException) -> Failure:
    """Build the failure variant matching an exception raised by an operation."""
    message = str(exc) or exc.__class__.__name__
    if isinstance(exc, SchemaValidationError):
        errors = tuple(exc.errors) if exc.errors is not None else None
        return ValidationFailure(message, errors, exc)
    return GenericFailure(message, exc)


def is_validation_failure(failure: Failure | None) -> bool:
    return isinstance(failure, ValidationFailure)


def validation_errors(failure: Failure | None) -> tuple[SchemaError, ...] | None:
    """
    Return the schema errors of a validation failure.

    Args:
        failure: Any failure, or None

    Returns:
        The ordered errors (possibly None or empty) for a ValidationFailure.
        None for every other failure; use is_validation_failure() to tell
        "no structured errors" apart from "not a validation failure".
    """
    if isinstance(failure, ValidationFailure):
        return failure.errors
    return None


def format_schema_error(error: SchemaError) -> str:
    """Render one error as "<path>: <message>", with "/" for the root and "Unknown error" for a missing message."""
    path = error.instance_path or "/"
    message = error.message or UNKNOWN_ERROR
    return f"{path}: {message}"


def format_validation_errors(errors: Sequence[SchemaError] | None) -> str:
    """Render errors one per line, or "No errors" when there are none."""
    if not errors:
        return NO_ERRORS
    return "\n".join(format_schema_error(error) for error in errors)
