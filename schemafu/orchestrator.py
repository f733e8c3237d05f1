"""
The bundle -> validate -> generate pipeline.

The pipeline is a small state machine. Every stage runs to completion before
the next one is considered, and the first failing stage moves the pipeline to
ABORTED; the caller decides what that means for the process exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .config import PipelineOptions, SchemafuConfig
from .paths import declaration_path
from .results import OperationResult
from .runner import ReportingPort
from .stages import bundle_operation, generate_operation, validate_operation

log = logging.getLogger(__name__)


class PipelineState(Enum):
    BUNDLING = "bundling"
    VALIDATING = "validating"
    GENERATING = "generating"
    DONE = "done"
    ABORTED = "aborted"


TERMINAL_STATES = (PipelineState.DONE, PipelineState.ABORTED)


@dataclass(frozen=True)
class PipelineOutcome:
    """Final state of a pipeline run.

    Attributes:
        state: DONE or ABORTED
        results: The result of every stage that ran, in order
        failed_stage: The stage that aborted the run, if any
    """

    state: PipelineState
    results: tuple[OperationResult, ...] = ()
    failed_stage: PipelineState | None = None

    @property
    def success(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def failed_result(self) -> OperationResult | None:
        if self.failed_stage is None:
            return None
        return self.results[-1]


class Pipeline:
    """Runs the stages of the process command in order, stopping at the first failure."""

    def __init__(
        self,
        config: SchemafuConfig | None = None,
        reporter: ReportingPort | None = None,
        on_result: Callable[[OperationResult], None] | None = None,
        bundle=bundle_operation,
        validate=validate_operation,
        generate=generate_operation,
    ):
        """
        Args:
            config: Defaults shared by the stages
            reporter: Receives the progress events of every stage
            on_result: Called with each stage result as soon as it is available
            bundle: Bundle stage adapter
            validate: Validate stage adapter
            generate: Generate stage adapter
        """
        self.config = config or SchemafuConfig()
        self.reporter = reporter
        self.on_result = on_result
        self._bundle = bundle
        self._validate = validate
        self._generate = generate

    async def run(self, input: str, options: PipelineOptions) -> PipelineOutcome:
        state = PipelineState.BUNDLING
        results: list[OperationResult] = []
        schema_path = ""

        while state not in TERMINAL_STATES:
            log.debug("Pipeline state: %s", state.value)

            if state is PipelineState.BUNDLING:
                result = await self._bundle(
                    input, options.output, options.pretty, config=self.config, reporter=self.reporter
                )
            elif state is PipelineState.VALIDATING:
                result = await self._validate(schema_path, options.strict, reporter=self.reporter)
            else:
                result = await self._generate(
                    schema_path,
                    declaration_path(schema_path),
                    options.strict,
                    options.indent,
                    options.banner,
                    config=self.config,
                    reporter=self.reporter,
                )

            results.append(result)
            if self.on_result is not None:
                self.on_result(result)

            if not result.success or (state is PipelineState.BUNDLING and result.data is None):
                log.debug("Pipeline aborted in state %s", state.value)
                return PipelineOutcome(PipelineState.ABORTED, tuple(results), failed_stage=state)

            if state is PipelineState.BUNDLING:
                # The bundled artifact is the input of every later stage
                schema_path = result.data.output_path
            state = self._next_state(state, options)

        log.debug("Pipeline done after %d stages", len(results))
        return PipelineOutcome(PipelineState.DONE, tuple(results))

    @staticmethod
    def _next_state(state: PipelineState, options: PipelineOptions) -> PipelineState:
        if state is PipelineState.BUNDLING and not options.skip_validation:
            return PipelineState.VALIDATING
        if state in (PipelineState.BUNDLING, PipelineState.VALIDATING) and not options.skip_generation:
            return PipelineState.GENERATING
        return PipelineState.DONE
