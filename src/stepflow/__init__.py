"""stepflow.

An in-process step-sequencing engine:
- blueprints built and rearranged by pure builder functions
- index and glob-pattern based step insertion
- a runner with success / failure / always continuation policies
"""

__version__ = "0.1.0"

from stepflow.workflow import (
    FunctionStep,
    RuntimeContext,
    StepInsertOptions,
    StepPolicy,
    Workflow,
    WorkflowAsStep,
    WorkflowBlueprint,
    WorkflowFailure,
    WorkflowResult,
    WorkflowRunner,
    WorkflowSuccess,
    step,
)

__all__ = [
    "__version__",
    "FunctionStep",
    "RuntimeContext",
    "StepInsertOptions",
    "StepPolicy",
    "Workflow",
    "WorkflowAsStep",
    "WorkflowBlueprint",
    "WorkflowFailure",
    "WorkflowResult",
    "WorkflowRunner",
    "WorkflowSuccess",
    "step",
]
