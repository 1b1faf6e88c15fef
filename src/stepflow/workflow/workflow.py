"""Fluent wrapper around a blueprint and the builder/runner functions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from . import builder
from .as_step import WorkflowAsStep
from .blueprint import WorkflowBlueprint
from .builder import StepsArg
from .runner import WorkflowRunner
from .types import PolicyLike, Step, StepInsertOptions, WorkflowResult


class Workflow:
    """An immutable workflow handle.

    Every modifier returns a new `Workflow`; the receiver keeps its
    blueprint, so a partially built workflow can be reused as a template.

    Example:
        wf = (
            Workflow.create()
            .push_step([checkout, build])
            .add_step(cleanup, after="build")
        )
        result = wf.run()
        if result.ok:
            print(result.result)
    """

    __slots__ = ("_blueprint",)

    def __init__(self, blueprint: WorkflowBlueprint) -> None:
        self._blueprint = blueprint

    @classmethod
    def create(
        cls,
        steps: StepsArg | None = None,
        *,
        conclude: Step | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> Workflow:
        return cls(builder.create_blueprint(steps, conclude, context))

    @classmethod
    def from_blueprint(cls, blueprint: WorkflowBlueprint) -> Workflow:
        return cls(blueprint)

    @property
    def blueprint(self) -> WorkflowBlueprint:
        return self._blueprint

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._blueprint.steps

    @property
    def conclude(self) -> Step:
        return self._blueprint.conclude

    @property
    def user_context(self) -> dict[str, Any]:
        return self._blueprint.user_context

    def push_step(self, steps: StepsArg) -> Workflow:
        return Workflow(builder.push_step(self._blueprint, steps))

    def unshift_step(self, steps: StepsArg) -> Workflow:
        return Workflow(builder.unshift_step(self._blueprint, steps))

    def add_step(
        self,
        steps: StepsArg,
        *,
        before: int | str | None = None,
        after: int | str | None = None,
        multi: bool | int | None = None,
    ) -> Workflow:
        options = StepInsertOptions(before=before, after=after, multi=multi)
        return Workflow(builder.add_step(self._blueprint, steps, options))

    def clear_steps(self) -> Workflow:
        return Workflow(builder.clear_steps(self._blueprint))

    def pop_step(self, n: int = 1) -> Workflow:
        return Workflow(builder.pop_step(self._blueprint, n))

    def shift_step(self, n: int = 1) -> Workflow:
        return Workflow(builder.shift_step(self._blueprint, n))

    def remove_step(self, target: StepsArg | str) -> Workflow:
        return Workflow(builder.remove_step(self._blueprint, target))

    def set_conclude(self, conclude: Step) -> Workflow:
        return Workflow(builder.set_conclude(self._blueprint, conclude))

    def set_context(self, context: Mapping[str, Any] | None = None) -> Workflow:
        return Workflow(builder.set_context(self._blueprint, context))

    def merge_context(self, context: Mapping[str, Any] | None = None) -> Workflow:
        return Workflow(builder.merge_context(self._blueprint, context))

    def update_context(self, partial: Mapping[str, Any]) -> Workflow:
        return Workflow(builder.update_context(self._blueprint, partial))

    def as_step(self, *, name: str | None = None, on: PolicyLike | None = None) -> WorkflowAsStep:
        return WorkflowAsStep(self._blueprint, name=name, on=on)

    def run(self) -> WorkflowResult:
        return WorkflowRunner(self._blueprint).run()

    def __repr__(self) -> str:
        return f"Workflow(steps={len(self._blueprint.steps)})"
