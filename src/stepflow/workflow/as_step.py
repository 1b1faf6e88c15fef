"""Embedding a whole workflow as one step of another workflow."""

from __future__ import annotations

from typing import Any

from . import builder
from .blueprint import WorkflowBlueprint
from .runner import WorkflowRunner
from .types import PolicyLike, RuntimeContext, StepPolicy


class WorkflowAsStep:
    """A step that runs a blueprint.

    The caller's user context is merged over the blueprint's own context for
    the inner run. The inner run starts from a copy of the caller's runtime
    state, so an outer failure makes the inner `success` steps skip, while
    the outer runtime context itself is left untouched.

    On inner failure the inner error is raised as-is, letting the outer
    runner apply its own continuation policy to this step.
    """

    def __init__(
        self,
        blueprint: WorkflowBlueprint,
        *,
        name: str | None = None,
        on: PolicyLike | None = None,
    ) -> None:
        self._blueprint = blueprint
        self.name: str = name or ""
        self.on: StepPolicy = StepPolicy(on) if on else StepPolicy.SUCCESS

    @property
    def blueprint(self) -> WorkflowBlueprint:
        return self._blueprint

    def run(self, runtime: RuntimeContext, context: dict[str, Any]) -> Any:
        blueprint = builder.merge_context(self._blueprint, context)
        inner_runtime = RuntimeContext(
            status=runtime.status,
            previous_step_output=runtime.previous_step_output,
            error=runtime.error,
        )
        result = WorkflowRunner(blueprint, inner_runtime).run()

        if result.status == "success":
            return result.result
        raise result.error

    def __repr__(self) -> str:
        return f"WorkflowAsStep(name={self.name!r}, on={self.on.value!r}, steps={len(self._blueprint.steps)})"
