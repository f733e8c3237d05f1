"""
Timed execution of a single asynchronous operation.

The runner never raises for a failing operation: the failure is captured in
the returned OperationResult. Progress events go to an injected ReportingPort.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar, runtime_checkable

from .classifier import failure_from_exception
from .results import OperationResult

log = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class ReportingPort(Protocol):
    """Receives progress events of running operations."""

    def start(self, label: str) -> None: ...

    def succeed(self, label: str, duration_ms: int) -> None: ...

    def fail(self, label: str) -> None: ...


class NullReporter:
    """A ReportingPort that discards every event."""

    def start(self, label: str) -> None:
        pass

    def succeed(self, label: str, duration_ms: int) -> None:
        pass

    def fail(self, label: str) -> None:
        pass


def _elapsed_ms(start: float, end: float) -> int:
    return max(0, round((end - start) * 1000))


async def run_operation(
    label: str,
    operation: Callable[[], Awaitable[T]],
    reporter: ReportingPort | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> OperationResult[T]:
    """
    Run an operation, timing it and capturing its failure.

    Args:
        label: Name of the operation, used in messages and events
        operation: Zero-argument callable returning an awaitable
        reporter: Destination of the start/succeed/fail events
        clock: Monotonic clock in seconds

    Returns:
        A successful result holding the operation's return value, or a failed
        result holding the classified failure.
    """
    reporter = reporter or NullReporter()
    reporter.start(label)
    log.debug("Starting %s", label)
    start = clock()

    try:
        data = await operation()
    except Exception as e:
        duration_ms = _elapsed_ms(start, clock())
        failure = failure_from_exception(e)
        log.debug("%s failed after %dms: %s", label, duration_ms, failure.message)
        reporter.fail(label)
        return OperationResult(
            success=False,
            message=failure.message,
            duration_ms=duration_ms,
            error=failure,
        )

    duration_ms = _elapsed_ms(start, clock())
    log.debug("%s completed in %dms", label, duration_ms)
    reporter.succeed(label, duration_ms)
    return OperationResult(
        success=True,
        message=f"{label} completed successfully",
        duration_ms=duration_ms,
        data=data,
    )
