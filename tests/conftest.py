"""Test configuration and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import pytest

from stepflow.workflow import FunctionStep, StepPolicy


@pytest.fixture
def make_step() -> Callable[..., FunctionStep]:
    """Build a step that returns its own name (or a given value)."""

    def factory(
        name: str | None = None, *, on: StepPolicy | str = StepPolicy.SUCCESS, value: object = None
    ) -> FunctionStep:
        result = value if value is not None else name
        return FunctionStep(fn=lambda _rt, _ctx: result, name=name, on=on)

    return factory


@pytest.fixture
def failing_step() -> Callable[..., FunctionStep]:
    """Build a step that raises the given exception."""

    def factory(
        error: Exception, name: str | None = None, *, on: StepPolicy | str = StepPolicy.SUCCESS
    ) -> FunctionStep:
        def fail(_rt: object, _ctx: object) -> None:
            raise error

        return FunctionStep(fn=fail, name=name, on=on)

    return factory


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo handler changes made by `configure_logging`."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    stepflow_level = logging.getLogger("stepflow").level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("stepflow").setLevel(stepflow_level)
