"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from workflow_automation.config import AppSettings


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("WORKFLOW_STATE_PATH", raising=False)
    monkeypatch.chdir(tmp_path)


def test_settings_defaults() -> None:
    settings = AppSettings()

    assert settings.log_level == "INFO"
    assert settings.state_path == Path("workflow_state")
    assert settings.workflows_state_file == Path("workflow_state") / "workflows.json"
    assert settings.users_state_file == Path("workflow_state") / "users.json"


def test_settings_loads_from_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "LOG_LEVEL=debug",
                "WORKFLOW_STATE_PATH=/var/lib/workflows",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = AppSettings()

    assert settings.log_level == "DEBUG"
    assert settings.workflows_state_file == Path("/var/lib/workflows/workflows.json")


def test_environment_overrides_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert AppSettings().log_level == "WARNING"


def test_settings_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        AppSettings()
