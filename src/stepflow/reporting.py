"""JSON-friendly views of workflows and run results."""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel

from stepflow.workflow import Workflow, WorkflowResult, WorkflowSuccess
from stepflow.workflow.types import resolve_policy, step_name


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


class RunReport(BaseModel):
    status: Literal["success", "failed"]
    result: Any = None
    step: int | None = None
    error_type: str | None = None
    error_message: str | None = None

    @classmethod
    def from_result(cls, result: WorkflowResult) -> RunReport:
        if isinstance(result, WorkflowSuccess):
            return cls(status="success", result=_jsonable(result.result))
        return cls(
            status="failed",
            step=result.step,
            error_type=type(result.error).__name__,
            error_message=str(result.error),
        )


class StepInfo(BaseModel):
    index: int | None
    name: str | None
    on: str


def describe_steps(workflow: Workflow) -> list[StepInfo]:
    """One entry per step, followed by the conclude step (index `None`)."""

    infos = [
        StepInfo(index=i, name=step_name(s), on=resolve_policy(s).value)
        for i, s in enumerate(workflow.steps)
    ]
    conclude = workflow.conclude
    infos.append(StepInfo(index=None, name=step_name(conclude), on=resolve_policy(conclude).value))
    return infos
