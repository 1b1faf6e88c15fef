"""Unit tests for the `stepflow` CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stepflow import __version__
from stepflow.cli import main


@pytest.fixture(autouse=True)
def cli_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, restore_root_logging: None
) -> None:
    for var in ("STEPFLOW_LOG_LEVEL", "STEPFLOW_LOG_FORMAT", "STEPFLOW_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("STEPFLOW_LOG_LEVEL", "ERROR")
    monkeypatch.chdir(tmp_path)


def _report(out: str) -> dict:
    return json.loads(out.strip().splitlines()[-1])


def test_run_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "workflow_fixtures:GREETING"]) == 0
    assert _report(capsys.readouterr().out)["result"] == "hello world"


def test_run_merges_context(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "workflow_fixtures:GREETING", "--context", '{"who": "cli"}']) == 0
    assert _report(capsys.readouterr().out)["result"] == "hello cli"


def test_run_failure_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "workflow_fixtures:BROKEN"]) == 1
    report = _report(capsys.readouterr().out)
    assert report["status"] == "failed"
    assert report["step"] == 1
    assert report["error_type"] == "RuntimeError"
    assert report["error_message"] == "boom"


@pytest.mark.parametrize("context", ["not json", "[1, 2]"])
def test_run_rejects_bad_context(context: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "workflow_fixtures:GREETING", "--context", context]) == 2
    assert "Invalid --context" in capsys.readouterr().err


def test_bad_target(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "workflow_fixtures:MISSING"]) == 2
    assert "MISSING" in capsys.readouterr().err


def test_configuration_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("STEPFLOW_LOG_FORMAT", "xml")
    assert main(["describe", "workflow_fixtures:GREETING"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_describe(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["describe", "workflow_fixtures:BROKEN"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "0\tsuccess\tgreet",
        "1\tsuccess\texplode",
        "2\talways\tcleanup",
        "conclude\tsuccess\tconclude",
    ]


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_run_stdout_holds_only_the_report(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("STEPFLOW_LOG_LEVEL")

    assert main(["run", "workflow_fixtures:GREETING"]) == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out) == {
        "status": "success",
        "result": "hello world",
        "step": None,
        "error_type": None,
        "error_message": None,
    }
    assert "Workflow succeeded" in captured.err


def test_failed_run_logs_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("STEPFLOW_LOG_LEVEL", "INFO")

    assert main(["run", "workflow_fixtures:BROKEN"]) == 1

    captured = capsys.readouterr()
    assert json.loads(captured.out)["step"] == 1
    assert "Step failed: boom" in captured.err


@pytest.mark.parametrize("target", ["workflow_fixtures:greeting_for", "workflow_fixtures:unavailable"])
def test_unusable_factory_target(target: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", target]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert target in captured.err
