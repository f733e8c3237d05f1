"""
Terminal rendering of operation progress and results.
"""

from __future__ import annotations

import click

from .classifier import format_validation_errors, is_validation_failure, validation_errors
from .formatting import format_duration, format_file_path
from .results import BundlePaths, GeneratePaths, OperationResult, ValidationReport


class ClickReporter:
    """ReportingPort printing progress lines with click."""

    def start(self, label: str) -> None:
        click.secho(f"{label}...", dim=True)

    def succeed(self, label: str, duration_ms: int) -> None:
        click.secho(f"✔ {label} completed in {format_duration(duration_ms)}", fg="green")

    def fail(self, label: str) -> None:
        click.secho(f"✖ {label} failed", fg="red", err=True)


def display_operation_details(result: OperationResult) -> None:
    """Print the details of a stage result: its payload, or its failure."""
    if not result.success:
        click.secho(result.message, fg="red", err=True)
        if is_validation_failure(result.error):
            click.echo(f"\n{click.style('Validation errors:', bold=True)}")
            click.echo(format_validation_errors(validation_errors(result.error)))
        return

    data = result.data
    if isinstance(data, BundlePaths):
        click.echo(f"{click.style('Input:', bold=True)} {format_file_path(data.input_path)}")
        click.echo(f"{click.style('Output:', bold=True)} {format_file_path(data.output_path)}")
    elif isinstance(data, GeneratePaths):
        click.echo(f"{click.style('Schema:', bold=True)} {format_file_path(data.schema_path)}")
        click.echo(f"{click.style('Output:', bold=True)} {format_file_path(data.output_path)}")
    elif isinstance(data, ValidationReport):
        click.echo(f"{click.style('Valid:', bold=True)} {str(data.valid).lower()}")
