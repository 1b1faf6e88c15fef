"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import json
import sys
import logging

import pytest

from stepflow.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="stepflow.workflow.runner",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Step failed: %s",
        args=("boom",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_payload() -> None:
    payload = json.loads(JsonFormatter().format(_record(step_index=3, step_name="deploy")))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "stepflow.workflow.runner"
    assert payload["message"] == "Step failed: boom"
    assert payload["extra"] == {"step_index": 3, "step_name": "deploy"}
    assert "timestamp" in payload


def test_json_formatter_handles_unserialisable_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record(output=object())))
    assert payload["extra"]["output"].startswith("<object object")


def test_json_formatter_includes_exception() -> None:
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: bad" in payload["exception"]


@pytest.mark.parametrize(("fmt", "formatter_type"), [("json", JsonFormatter), ("text", logging.Formatter)])
def test_configure_logging_replaces_handlers(
    fmt: str, formatter_type: type, restore_root_logging: None
) -> None:
    configure_logging("debug", fmt)  # type: ignore[arg-type]
    configure_logging("debug", fmt)  # type: ignore[arg-type]

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, formatter_type)
    assert root.handlers[0].stream is sys.stderr
