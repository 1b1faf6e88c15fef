"""The declarative description of a workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .types import RuntimeContext, Step


class PassThroughConclude:
    """Default conclude step: hands back what the last executed step returned."""

    name = "conclude"
    on = None

    def run(self, runtime: RuntimeContext, _context: dict[str, Any]) -> Any:
        return runtime.previous_step_output

    def __repr__(self) -> str:
        return "PassThroughConclude()"


@dataclass(frozen=True, slots=True)
class WorkflowBlueprint:
    """Ordered steps, the conclude step and the user context.

    Blueprints are never modified in place; the builder functions return new
    instances. The user context dict is handed to steps by reference, so
    steps of a single run may use it to communicate.
    """

    steps: tuple[Step, ...] = ()
    conclude: Step = field(default_factory=PassThroughConclude)
    user_context: dict[str, Any] = field(default_factory=dict)

