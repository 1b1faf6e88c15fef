"""Pure operations that derive a new blueprint from an existing one.

None of these functions modify their input blueprint. Out-of-range indices,
patterns that match nothing and `multi=0` never raise; they reduce the
operation to a no-op instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, assert_never

from .blueprint import PassThroughConclude, WorkflowBlueprint
from .matching import matches
from .types import InsertionPoint, InsertPosition, Step, StepInsertOptions, step_name

logger = logging.getLogger(__name__)

StepsArg = Step | Iterable[Step]


def as_step_list(steps: StepsArg) -> list[Step]:
    """Accept a single step or an iterable of steps."""

    # workflow.py imports this module.
    from .workflow import Workflow

    if isinstance(steps, Workflow):
        raise TypeError("A Workflow is not a step; embed it with workflow.as_step()")
    if hasattr(steps, "run"):
        return [steps]  # type: ignore[list-item]
    if isinstance(steps, (str, bytes, Mapping)):
        raise TypeError(f"Expected a step or a sequence of steps (type={type(steps).__name__})")

    items = list(steps)
    if any(isinstance(s, Workflow) for s in items):
        raise TypeError("A Workflow is not a step; embed it with workflow.as_step()")
    return items


def _context_dict(context: Mapping[str, Any] | None) -> dict[str, Any]:
    # A dict is kept as-is so steps and callers share the same object.
    if context is None:
        return {}
    return context if isinstance(context, dict) else dict(context)


def create_blueprint(
    steps: StepsArg | None = None,
    conclude: Step | None = None,
    context: Mapping[str, Any] | None = None,
) -> WorkflowBlueprint:
    return WorkflowBlueprint(
        steps=tuple(as_step_list(steps)) if steps is not None else (),
        conclude=conclude if conclude is not None else PassThroughConclude(),
        user_context=_context_dict(context),
    )


# Insertion point resolution


def find_matching_step_indices(blueprint: WorkflowBlueprint, pattern: str) -> list[int]:
    """Indices (ascending) of the steps whose name matches `pattern`."""

    return [i for i, s in enumerate(blueprint.steps) if matches(step_name(s), pattern)]


def resolve_option(
    blueprint: WorkflowBlueprint, option: int | str | None, pos: InsertPosition
) -> list[InsertionPoint]:
    """Turn one `before`/`after` option into insertion points.

    Indices are taken as given; bounds are handled when splicing.
    """

    if option is None:
        return []
    if isinstance(option, bool):
        raise TypeError(f"Invalid insert option: {option!r}")
    if isinstance(option, int):
        return [InsertionPoint(index=option, pos=pos)]
    if isinstance(option, str):
        return [
            InsertionPoint(index=i, pos=pos)
            for i in find_matching_step_indices(blueprint, option)
        ]
    raise TypeError(f"Invalid insert option: {option!r}")


def _position_rank(pos: InsertPosition) -> int:
    if pos is InsertPosition.BEFORE:
        return 0
    if pos is InsertPosition.AFTER:
        return 1
    assert_never(pos)


def sorted_insertion_points(
    blueprint: WorkflowBlueprint, options: StepInsertOptions
) -> list[InsertionPoint]:
    """Points from `before` then `after`, ordered by index; `before` wins ties."""

    points = [
        *resolve_option(blueprint, options.before, InsertPosition.BEFORE),
        *resolve_option(blueprint, options.after, InsertPosition.AFTER),
    ]
    return sorted(points, key=lambda p: (p.index, _position_rank(p.pos)))


def apply_multi(points: list[InsertionPoint], multi: bool | int | None) -> list[InsertionPoint]:
    if multi is None or multi is True:
        return list(points)
    if multi is False:
        return points[:1]
    if isinstance(multi, int):
        if multi > 0:
            return points[:multi]
        return points[max(len(points) + multi, 0) :]
    raise TypeError(f"Invalid multi option: {multi!r}")


def calc_insertion_points(
    blueprint: WorkflowBlueprint, options: StepInsertOptions | None = None
) -> list[InsertionPoint]:
    """Final, ordered insertion points for `add_step`."""

    if options is None or options.is_empty:
        return [InsertionPoint(index=len(blueprint.steps), pos=InsertPosition.AFTER)]

    points = sorted_insertion_points(blueprint, options)
    return apply_multi(points, options.multi)


# Step list operations


def push_step(blueprint: WorkflowBlueprint, steps: StepsArg) -> WorkflowBlueprint:
    return replace(blueprint, steps=(*blueprint.steps, *as_step_list(steps)))


def unshift_step(blueprint: WorkflowBlueprint, steps: StepsArg) -> WorkflowBlueprint:
    return replace(blueprint, steps=(*as_step_list(steps), *blueprint.steps))


def add_step(
    blueprint: WorkflowBlueprint,
    steps: StepsArg,
    options: StepInsertOptions | None = None,
) -> WorkflowBlueprint:
    """Insert `steps` at every point resolved from `options`.

    Points are applied from the highest index down so that earlier
    insertions do not shift the indices of later ones.

    Example:
        Given steps [env/install-python, env/install-node, checkout],
        `add_step(bp, s, StepInsertOptions(before="env/*"))` yields
        [s, env/install-python, s, env/install-node, checkout].
    """

    new_steps = as_step_list(steps)
    points = calc_insertion_points(blueprint, options)
    result = list(blueprint.steps)

    for point in reversed(points):
        if point.pos is InsertPosition.BEFORE:
            at = point.index
        elif point.pos is InsertPosition.AFTER:
            at = point.index + 1
        else:
            assert_never(point.pos)
        result[at:at] = new_steps

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Resolved insertion points",
            extra={"points": [(p.index, p.pos.value) for p in points]},
        )
    return replace(blueprint, steps=tuple(result))


def clear_steps(blueprint: WorkflowBlueprint) -> WorkflowBlueprint:
    return replace(blueprint, steps=())


def pop_step(blueprint: WorkflowBlueprint, n: int = 1) -> WorkflowBlueprint:
    """Drop the last `n` steps. Popping more than exist leaves no steps."""

    keep = max(0, len(blueprint.steps) - max(n, 0))
    return replace(blueprint, steps=blueprint.steps[:keep])


def shift_step(blueprint: WorkflowBlueprint, n: int = 1) -> WorkflowBlueprint:
    """Drop the first `n` steps. Shifting more than exist leaves no steps."""

    return replace(blueprint, steps=blueprint.steps[max(n, 0) :])


def remove_step(blueprint: WorkflowBlueprint, target: StepsArg | str) -> WorkflowBlueprint:
    """Remove steps by identity, or by name when `target` is a glob pattern."""

    if isinstance(target, str):
        pattern = target
        kept = [s for s in blueprint.steps if not matches(step_name(s), pattern)]
    else:
        doomed = as_step_list(target)
        kept = [s for s in blueprint.steps if not any(s is d for d in doomed)]
    return replace(blueprint, steps=tuple(kept))


# Conclude and context


def set_conclude(blueprint: WorkflowBlueprint, conclude: Step) -> WorkflowBlueprint:
    return replace(blueprint, conclude=conclude)


def set_context(
    blueprint: WorkflowBlueprint, context: Mapping[str, Any] | None = None
) -> WorkflowBlueprint:
    """Replace the user context; no argument resets it to an empty dict."""

    return replace(blueprint, user_context=_context_dict(context))


def merge_context(
    blueprint: WorkflowBlueprint, context: Mapping[str, Any] | None = None
) -> WorkflowBlueprint:
    """Shallow-merge `context` over the current user context (new keys win)."""

    return replace(blueprint, user_context={**blueprint.user_context, **(context or {})})


def update_context(
    blueprint: WorkflowBlueprint, partial: Mapping[str, Any]
) -> WorkflowBlueprint:
    """Overwrite some keys of the user context.

    Same mechanism as `merge_context`; the argument is required.
    """

    return replace(blueprint, user_context={**blueprint.user_context, **partial})


__all__ = [
    "add_step",
    "apply_multi",
    "as_step_list",
    "calc_insertion_points",
    "clear_steps",
    "create_blueprint",
    "find_matching_step_indices",
    "merge_context",
    "pop_step",
    "push_step",
    "remove_step",
    "resolve_option",
    "set_conclude",
    "set_context",
    "shift_step",
    "sorted_insertion_points",
    "unshift_step",
    "update_context",
]
