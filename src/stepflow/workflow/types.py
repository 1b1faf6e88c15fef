"""Core value types shared by the builder, the runner and step adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Protocol, TypeAlias


class StepPolicy(str, Enum):
    """When a step runs, given the failure state of the current run."""

    SUCCESS = "success"
    FAILURE = "failure"
    ALWAYS = "always"


class InsertPosition(str, Enum):
    BEFORE = "before"
    AFTER = "after"


class RunStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class StepExecutionError(Exception):
    """Raised in place of a failure value that is not an exception."""


def normalize_error(value: object) -> Exception:
    if isinstance(value, Exception):
        return value
    return StepExecutionError(str(value))


@dataclass(slots=True)
class RuntimeContext:
    """Per-run execution state handed to every step.

    Created fresh for each run and mutated by the runner between steps.
    """

    status: RunStatus = RunStatus.SUCCESS
    previous_step_output: Any = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.status is RunStatus.FAILED


class Step(Protocol):
    """A unit of work.

    `name` and `on` are optional attributes; the runner and the builder read
    them with `getattr` so any object with a compatible `run` qualifies.
    """

    def run(self, runtime: RuntimeContext, context: dict[str, Any]) -> Any: ...


StepFn: TypeAlias = Callable[[RuntimeContext, dict[str, Any]], Any]
PolicyLike: TypeAlias = StepPolicy | Literal["success", "failure", "always"]


def step_name(step: object) -> str | None:
    name = getattr(step, "name", None)
    return name if isinstance(name, str) else None


def resolve_policy(step: object) -> StepPolicy:
    raw = getattr(step, "on", None)
    if raw is None:
        return StepPolicy.SUCCESS
    return StepPolicy(raw)


@dataclass(frozen=True, slots=True)
class FunctionStep:
    """Adapts a plain callable `fn(runtime, context)` to the step protocol."""

    fn: StepFn
    name: str | None = None
    on: StepPolicy = StepPolicy.SUCCESS

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise TypeError(f"Step fn must be callable (type={type(self.fn).__name__})")
        if self.name is not None and not isinstance(self.name, str):
            raise TypeError(
                f"Step name must be a string or None (type={type(self.name).__name__})"
            )
        object.__setattr__(self, "on", StepPolicy(self.on))

    def run(self, runtime: RuntimeContext, context: dict[str, Any]) -> Any:
        return self.fn(runtime, context)


def step(
    name: str | None = None, *, on: PolicyLike = StepPolicy.SUCCESS
) -> Callable[[StepFn], FunctionStep]:
    """Decorator turning a function into a `FunctionStep`.

    Example:
        @step("env/install-python", on="always")
        def install(runtime, context):
            ...
    """

    def wrap(fn: StepFn) -> FunctionStep:
        return FunctionStep(fn=fn, name=name, on=StepPolicy(on))

    return wrap


@dataclass(frozen=True, slots=True)
class InsertionPoint:
    index: int
    pos: InsertPosition


@dataclass(frozen=True, slots=True)
class StepInsertOptions:
    """Where `add_step` places new steps.

    `before`/`after` take an index or a glob pattern over step names.
    `multi` limits how many resolved points are used: `None`/`True` keeps
    all, `False` the first, a positive int the first n, a negative int the
    last n.
    """

    before: int | str | None = None
    after: int | str | None = None
    multi: bool | int | None = None

    @property
    def is_empty(self) -> bool:
        return self.before is None and self.after is None and self.multi is None


@dataclass(frozen=True, slots=True)
class WorkflowSuccess:
    result: Any = None
    status: Literal["success"] = "success"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class WorkflowFailure:
    step: int
    error: Exception
    status: Literal["failed"] = "failed"

    @property
    def ok(self) -> bool:
        return False


WorkflowResult: TypeAlias = WorkflowSuccess | WorkflowFailure
