#!/usr/bin/env python3
"""Programmatic workflow example.

This demonstrates composing a setup/build/cleanup pipeline:

* steps declared with the `@step` decorator
* extra steps spliced in by name pattern
* a cleanup step that runs whether or not the build failed

Run with `--fail` to see the failure path.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from stepflow import Workflow, step
from stepflow.config import StepflowSettings


@step("env/install-python")
def install_python(_runtime, context):
    context["installed"].append("python")


@step("env/install-node")
def install_node(_runtime, context):
    context["installed"].append("node")


@step("build")
def build(_runtime, context):
    if context["fail"]:
        raise RuntimeError("compiler exploded")
    return f"built with {', '.join(context['installed'])}"


@step("log-env")
def log_env(_runtime, context):
    print(f"  installed so far: {context['installed']}")


@step("cleanup", on="always")
def cleanup(runtime, _context):
    print(f"  cleanup (status={runtime.status.value})")
    return runtime.previous_step_output


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a small setup/build/cleanup workflow.")
    parser.add_argument("--fail", action="store_true", help="Make the build step fail")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    StepflowSettings().setup_logging()

    workflow = (
        Workflow.create([install_python, install_node, build, cleanup])
        .add_step(log_env, after="env/*")
        .set_context({"installed": [], "fail": args.fail})
    )

    result = workflow.run()
    if result.ok:
        print(f"Succeeded: {result.result}")
        return 0

    print(f"Failed at step {result.step}: {result.error}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
