"""CLI entrypoint: run or inspect a workflow defined in Python code."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from stepflow import __version__
from stepflow.config import StepflowSettings
from stepflow.loader import TargetLoadError, load_target
from stepflow.reporting import RunReport, describe_steps

logger = logging.getLogger(__name__)


def _parse_context(value: str | None) -> dict[str, object] | None:
    if value is None:
        return None
    parsed = json.loads(value)
    if not isinstance(parsed, dict):
        raise ValueError("--context must be a JSON object")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepflow",
        description="Run and inspect step workflows",
    )
    parser.add_argument("--version", action="version", version=f"stepflow {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a workflow and print the result as JSON")
    run.add_argument(
        "target",
        help="Workflow reference in the form 'package.module:attribute'",
    )
    run.add_argument(
        "--context",
        default=None,
        help="JSON object merged into the workflow's user context",
    )

    describe = subparsers.add_parser("describe", help="List the steps of a workflow")
    describe.add_argument(
        "target",
        help="Workflow reference in the form 'package.module:attribute'",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = StepflowSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    settings.setup_logging()

    try:
        workflow = load_target(args.target)
    except TargetLoadError as e:
        print(str(e), file=sys.stderr)
        return 2

    try:
        if args.command == "run":
            try:
                context = _parse_context(args.context)
            except ValueError as e:
                print(f"Invalid --context: {e}", file=sys.stderr)
                return 2

            if context is not None:
                workflow = workflow.merge_context(context)

            report = RunReport.from_result(workflow.run())
            print(report.model_dump_json())
            return 0 if report.status == "success" else 1

        if args.command == "describe":
            for info in describe_steps(workflow):
                index = "conclude" if info.index is None else str(info.index)
                print(f"{index}\t{info.on}\t{info.name or '<unnamed>'}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
