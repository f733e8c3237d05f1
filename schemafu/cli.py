import asyncio
import logging
import sys

import click

from . import __version__
from .config import PipelineOptions, SchemafuConfig
from .orchestrator import Pipeline
from .reporter import ClickReporter, display_operation_details
from .stages import bundle_operation, generate_operation, validate_operation


def _finish(ctx: click.Context, result) -> None:
    display_operation_details(result)
    if not result.success:
        ctx.exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="schemafu")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug information")
@click.option(
    "--config",
    "-c",
    default=None,
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="JSON file overriding the default output path and indentation",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Bundle, validate, and convert JSON Schema to TypeScript"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = SchemafuConfig.from_file(config) if config is not None else SchemafuConfig()


@cli.command()
@click.argument("input")
@click.option("--output", "-o", default=None, help="Output file path")
@click.option("--pretty", "-p", is_flag=True, default=False, help="Pretty print the output JSON")
@click.pass_context
def bundle(ctx, input, output, pretty):
    """Bundle a JSON schema with all its references"""
    result = asyncio.run(bundle_operation(input, output, pretty, config=ctx.obj, reporter=ClickReporter()))
    _finish(ctx, result)


@cli.command()
@click.argument("input")
@click.option("--strict", "-s", is_flag=True, default=False, help="Use strict validation mode")
@click.pass_context
def validate(ctx, input, strict):
    """Validate a JSON schema against meta-schema"""
    result = asyncio.run(validate_operation(input, strict, reporter=ClickReporter()))
    _finish(ctx, result)


@cli.command()
@click.argument("schema")
@click.option("--output", "-o", default=None, help="Output TypeScript file path")
@click.option("--strict", "-s", is_flag=True, default=False, help="Use strict types")
@click.option("--indent", "-i", default=None, type=click.IntRange(min=0), help="Indentation spaces")
@click.option("--banner", "-b", default=None, help="Custom banner comment")
@click.pass_context
def generate(ctx, schema, output, strict, indent, banner):
    """Generate TypeScript interfaces from a JSON schema"""
    result = asyncio.run(
        generate_operation(schema, output, strict, indent, banner, config=ctx.obj, reporter=ClickReporter())
    )
    _finish(ctx, result)


cli.add_command(generate, name="ts")


@cli.command()
@click.argument("input")
@click.option("--output", "-o", default=None, help="Output bundled schema file path")
@click.option("--pretty", "-p", is_flag=True, default=False, help="Pretty print the output JSON")
@click.option("--strict", "-s", is_flag=True, default=False, help="Use strict validation mode")
@click.option("--indent", "-i", default=None, type=click.IntRange(min=0), help="Indentation spaces for TypeScript")
@click.option("--banner", "-b", default=None, help="Custom banner comment")
@click.option("--skip-validation", is_flag=True, default=False, help="Skip validation step")
@click.option("--skip-generate", "skip_generation", is_flag=True, default=False, help="Skip TypeScript generation step")
@click.pass_context
def process(ctx, input, output, pretty, strict, indent, banner, skip_validation, skip_generation):
    """Process a schema: bundle, validate, and generate TypeScript"""
    options = PipelineOptions(
        output=output,
        pretty=pretty,
        strict=strict,
        indent=indent,
        banner=banner,
        skip_validation=skip_validation,
        skip_generation=skip_generation,
    )
    pipeline = Pipeline(config=ctx.obj, reporter=ClickReporter(), on_result=display_operation_details)
    outcome = asyncio.run(pipeline.run(input, options))
    if not outcome.success:
        ctx.exit(1)
    click.secho("\n✓ All operations completed successfully", fg="green")


def run_cli(args: list[str] | None = None) -> int:
    """Run the CLI and return its exit code instead of exiting."""
    try:
        rv = cli.main(args=args, prog_name="schemafu", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return 1
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return rv if isinstance(rv, int) else 0


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
