"""End-to-end tests for the CLI against a temporary JSON store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from workflow_automation.main import build_parser, main


@pytest.fixture(autouse=True)
def _state_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WORKFLOW_STATE_PATH", str(tmp_path / "state"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return tmp_path / "state"


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, object]:
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out) if out.strip() else None


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_cli_authoring_flow(capsys: pytest.CaptureFixture[str], _state_dir: Path) -> None:
    code, created = _run(capsys, "create-workflow", "--name", "Welcome Flow")
    assert code == 0
    workflow_id = created["id"]
    assert created["status"] == "draft"

    code, shown = _run(
        capsys,
        "add-step",
        "--workflow-id",
        workflow_id,
        "--name",
        "Pause",
        "--type",
        "wait",
        "--order",
        "2",
        "--config",
        "duration_hours=24",
    )
    assert code == 0
    assert shown["steps"][0]["config"] == {"duration_hours": 24}

    code, shown = _run(
        capsys,
        "add-step",
        "--workflow-id",
        workflow_id,
        "--name",
        "Welcome",
        "--type",
        "email",
        "--order",
        "1",
        "--config",
        "template_id=welcome",
    )
    assert code == 0
    assert [s["name"] for s in shown["steps"]] == ["Welcome", "Pause"]

    code, status = _run(capsys, "activate", "--workflow-id", workflow_id)
    assert (code, status["status"]) == (0, "active")

    code, listed = _run(capsys, "list-workflows", "--active")
    assert code == 0
    assert [(w["name"], w["steps"]) for w in listed] == [("Welcome Flow", 2)]

    code, _ = _run(capsys, "deactivate", "--workflow-id", workflow_id)
    assert code == 0
    code, status = _run(capsys, "reactivate", "--workflow-id", workflow_id)
    assert status["status"] == "active"

    stored = json.loads((_state_dir / "workflows.json").read_text(encoding="utf-8"))
    assert stored[0]["status"] == "active"


def test_cli_reports_domain_errors_with_exit_code_3(capsys: pytest.CaptureFixture[str]) -> None:
    _, created = _run(capsys, "create-workflow", "--name", "Empty")

    code = main(["activate", "--workflow-id", created["id"]])
    captured = capsys.readouterr()

    assert code == 3
    assert "at least one step" in captured.err
    assert captured.out == ""


def test_cli_rejects_invalid_step_config(capsys: pytest.CaptureFixture[str]) -> None:
    _, created = _run(capsys, "create-workflow", "--name", "Welcome Flow")

    code = main(
        [
            "add-step",
            "--workflow-id",
            created["id"],
            "--name",
            "Mail",
            "--type",
            "email",
            "--order",
            "1",
        ]
    )

    assert code == 3
    assert "template_id" in capsys.readouterr().err


def test_cli_reorder_steps(capsys: pytest.CaptureFixture[str]) -> None:
    _, created = _run(capsys, "create-workflow", "--name", "Welcome Flow")
    workflow_id = created["id"]
    _, shown = _run(
        capsys, "add-step", "--workflow-id", workflow_id, "--name", "A", "--type", "action",
        "--order", "1",
    )
    _, shown = _run(
        capsys, "add-step", "--workflow-id", workflow_id, "--name", "B", "--type", "action",
        "--order", "2",
    )
    a_id, b_id = (s["id"] for s in shown["steps"])

    code, shown = _run(
        capsys, "reorder-steps", "--workflow-id", workflow_id,
        "--set", f"{a_id}=2", "--set", f"{b_id}=1",
    )

    assert code == 0
    assert [s["name"] for s in shown["steps"]] == ["B", "A"]


def test_cli_register_user_twice(capsys: pytest.CaptureFixture[str]) -> None:
    code, user = _run(capsys, "register-user", "--name", "Test User", "--email", "t@example.com")
    assert code == 0
    assert user["email"] == "t@example.com"

    code = main(["register-user", "--name", "Other", "--email", "t@example.com"])
    assert code == 3
    assert "email already used" in capsys.readouterr().err


def test_cli_unknown_workflow(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["show-workflow", "--workflow-id", "12345678-1234-5678-1234-567812345678"])

    assert code == 3
    assert "workflow not found" in capsys.readouterr().err


def test_cli_configuration_error(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    assert main(["list-workflows"]) == 2
    assert "Configuration error" in capsys.readouterr().err
