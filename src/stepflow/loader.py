"""Resolve `package.module:attribute` references to workflows."""

from __future__ import annotations

import importlib

from stepflow.workflow import Workflow, WorkflowBlueprint


class TargetLoadError(ValueError):
    pass


def load_target(ref: str) -> Workflow:
    """Import `ref` and return it as a `Workflow`.

    The attribute may be a `Workflow`, a `WorkflowBlueprint`, or a
    zero-argument callable returning either.
    """

    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name.strip() or not attr_path.strip():
        raise TargetLoadError(f"Expected 'package.module:attribute', got {ref!r}")

    try:
        obj: object = importlib.import_module(module_name.strip())
    except Exception as e:
        # Anything raised while importing user code is a load failure.
        raise TargetLoadError(f"Cannot import module {module_name!r}: {e}") from e

    for part in attr_path.strip().split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TargetLoadError(f"{ref!r} has no attribute {part!r}") from e

    if not isinstance(obj, (Workflow, WorkflowBlueprint)) and callable(obj):
        try:
            obj = obj()
        except Exception as e:
            raise TargetLoadError(f"Calling {ref!r} failed: {e}") from e

    if isinstance(obj, Workflow):
        return obj
    if isinstance(obj, WorkflowBlueprint):
        return Workflow.from_blueprint(obj)
    raise TargetLoadError(
        f"{ref!r} is not a Workflow or WorkflowBlueprint (type={type(obj).__name__})"
    )
