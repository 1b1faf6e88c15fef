"""Sequential execution of a blueprint under the continuation policy."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, assert_never

from .blueprint import WorkflowBlueprint
from .types import (
    RunStatus,
    RuntimeContext,
    Step,
    StepPolicy,
    WorkflowFailure,
    WorkflowResult,
    WorkflowSuccess,
    normalize_error,
    resolve_policy,
    step_name,
)

logger = logging.getLogger(__name__)


def should_run(policy: StepPolicy, runtime: RuntimeContext) -> bool:
    if policy is StepPolicy.SUCCESS:
        return not runtime.failed
    if policy is StepPolicy.FAILURE:
        return runtime.failed
    if policy is StepPolicy.ALWAYS:
        return True
    assert_never(policy)


class WorkflowRunner:
    """Runs the steps of a blueprint, then its conclude step.

    Step errors never escape `run()`: the last one recorded is reported in a
    `WorkflowFailure`. Once a failure is recorded it persists for the rest
    of the run; later `failure`/`always` steps still execute and may replace
    it with their own error.

    Args:
        blueprint: What to run. It is only read.
        runtime: Optional state to start from. Its status decides whether
            `success` steps run, but a run only reports failure for errors it
            caught itself. A fresh context is created when omitted.
    """

    def __init__(self, blueprint: WorkflowBlueprint, runtime: RuntimeContext | None = None) -> None:
        self._blueprint = blueprint
        self._runtime = runtime

    @property
    def blueprint(self) -> WorkflowBlueprint:
        return self._blueprint

    def _iter_steps(self) -> Iterator[tuple[int, Step]]:
        yield from enumerate(self._blueprint.steps)
        yield len(self._blueprint.steps), self._blueprint.conclude

    def run(self) -> WorkflowResult:
        runtime = self._runtime if self._runtime is not None else RuntimeContext()
        context: dict[str, Any] = self._blueprint.user_context
        caught: Exception | None = None
        failed_step = -1

        for index, step in self._iter_steps():
            policy = resolve_policy(step)
            extra = {"step_index": index, "step_name": step_name(step), "policy": policy.value}

            if not should_run(policy, runtime):
                logger.debug("Skipping step", extra=extra)
                continue

            logger.debug("Running step", extra=extra)
            try:
                output = step.run(runtime, context)
            except Exception as exc:
                caught = normalize_error(exc)
                failed_step = index
                runtime.status = RunStatus.FAILED
                runtime.error = caught
                logger.warning(
                    "Step failed: %s", caught, extra={**extra, "error_type": type(caught).__name__}
                )
                continue

            runtime.previous_step_output = output

        if caught is not None:
            logger.info("Workflow failed", extra={"status": "failed", "step_index": failed_step})
            return WorkflowFailure(step=failed_step, error=caught)

        logger.info("Workflow succeeded", extra={"status": "success"})
        return WorkflowSuccess(result=runtime.previous_step_output)
