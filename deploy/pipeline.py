"""
Linear pipeline executor.

Steps run strictly one after another. A step's success is the only thing
that lets the next one start: the first failure marks every remaining
step skipped, marks the run failed and propagates. There are no retries,
no parallel branches and no partial-success outcomes.
"""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from deploy.exceptions import PipelineFailedError

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Step:
    """
    One pipeline step: a single external command or API invocation.

    Attributes:
        name: Step identifier (e.g., 'build')
        action: Callable performing the step; raising means failure
        description: Human readable summary
    """
    name: str
    action: Callable[[], Any]
    description: str = ""


@dataclass
class StepResult:
    """Outcome of one step within a run."""
    name: str
    status: StepStatus = StepStatus.PENDING
    started_at: datetime | None = None
    finished_at: datetime | None = None
    duration_seconds: float | None = None
    error: BaseException | None = None


@dataclass
class PipelineRun:
    """Record of one pipeline execution."""
    results: list[StepResult] = field(default_factory=list)
    status: StepStatus = StepStatus.PENDING

    @property
    def succeeded(self) -> bool:
        return self.status == StepStatus.SUCCEEDED

    @property
    def failed_step(self) -> str | None:
        for result in self.results:
            if result.status == StepStatus.FAILED:
                return result.name
        return None

    def executed(self) -> list[str]:
        """Names of steps that started, in order."""
        return [r.name for r in self.results if r.started_at is not None]

    def result(self, name: str) -> StepResult:
        for result in self.results:
            if result.name == name:
                return result
        raise KeyError(name)


class Pipeline:
    """Ordered, fail-fast sequence of steps."""

    def __init__(self, steps: Sequence[Step], name: str = "deploy") -> None:
        names = [step.name for step in steps]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate step names: {sorted(duplicates)}")
        self.name = name
        self.steps = tuple(steps)

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]

    def run(self) -> PipelineRun:
        """
        Execute every step in order.

        Returns:
            PipelineRun: Record with every step succeeded

        Raises:
            PipelineFailedError: On the first failing step, chained to its error
        """
        run = PipelineRun(results=[StepResult(name=step.name) for step in self.steps])
        run.status = StepStatus.RUNNING
        logger.info(f"Starting pipeline '{self.name}': {' -> '.join(self.step_names)}")

        for index, step in enumerate(self.steps):
            result = run.results[index]
            result.status = StepStatus.RUNNING
            result.started_at = datetime.now(timezone.utc)
            started = time.monotonic()
            logger.info(f"[{index + 1}/{len(self.steps)}] {step.name}: {step.description or 'running'}")

            try:
                step.action()
            except Exception as e:
                result.finished_at = datetime.now(timezone.utc)
                result.duration_seconds = time.monotonic() - started
                result.status = StepStatus.FAILED
                result.error = e
                for later in run.results[index + 1:]:
                    later.status = StepStatus.SKIPPED
                run.status = StepStatus.FAILED
                logger.error(
                    f"✗ {step.name} failed after {result.duration_seconds:.2f}s: {e}"
                )
                raise PipelineFailedError(run, step.name, e) from e

            result.finished_at = datetime.now(timezone.utc)
            result.duration_seconds = time.monotonic() - started
            result.status = StepStatus.SUCCEEDED
            logger.info(f"✓ {step.name} completed in {result.duration_seconds:.2f}s")

        run.status = StepStatus.SUCCEEDED
        logger.info(f"Pipeline '{self.name}' succeeded")
        return run
