"""schemafu

Bundle, validate, and convert JSON Schema documents to TypeScript declarations.
The three stages can run on their own or chained by the ``process`` pipeline,
which stops at the first failing stage.
"""

__version__ = "0.1.0"

from .config import PipelineOptions, SchemafuConfig
from .errors import (
    BundleError,
    GenerationError,
    InputNotFoundError,
    SchemafuError,
    SchemaValidationError,
    WriteError,
)
from .orchestrator import Pipeline, PipelineOutcome, PipelineState
from .results import (
    BundlePaths,
    GenericFailure,
    GeneratePaths,
    OperationResult,
    SchemaError,
    ValidationFailure,
    ValidationReport,
)
from .runner import ReportingPort, run_operation

__all__ = [
    "BundleError",
    "BundlePaths",
    "GenerationError",
    "GenericFailure",
    "GeneratePaths",
    "InputNotFoundError",
    "OperationResult",
    "Pipeline",
    "PipelineOptions",
    "PipelineOutcome",
    "PipelineState",
    "ReportingPort",
    "SchemaError",
    "SchemaValidationError",
    "SchemafuConfig",
    "SchemafuError",
    "ValidationFailure",
    "ValidationReport",
    "WriteError",
    "run_operation",
]
