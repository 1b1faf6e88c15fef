"""Blueprint construction and execution.

- `builder`: pure functions deriving new blueprints (insert, remove, context)
- `runner`: executes a blueprint under the success/failure/always policy
- `as_step`: embeds a blueprint as a single step of another one
- `workflow`: a fluent, immutable facade over the above
"""

from stepflow.workflow.as_step import WorkflowAsStep
from stepflow.workflow.blueprint import PassThroughConclude, WorkflowBlueprint
from stepflow.workflow.matching import matches
from stepflow.workflow.runner import WorkflowRunner
from stepflow.workflow.types import (
    FunctionStep,
    InsertionPoint,
    InsertPosition,
    RunStatus,
    RuntimeContext,
    Step,
    StepExecutionError,
    StepInsertOptions,
    StepPolicy,
    WorkflowFailure,
    WorkflowResult,
    WorkflowSuccess,
    step,
)
from stepflow.workflow.workflow import Workflow

__all__ = [
    "FunctionStep",
    "InsertPosition",
    "InsertionPoint",
    "PassThroughConclude",
    "RunStatus",
    "RuntimeContext",
    "Step",
    "StepExecutionError",
    "StepInsertOptions",
    "StepPolicy",
    "Workflow",
    "WorkflowAsStep",
    "WorkflowBlueprint",
    "WorkflowFailure",
    "WorkflowResult",
    "WorkflowRunner",
    "WorkflowSuccess",
    "matches",
    "step",
]
