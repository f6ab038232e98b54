"""Settings for the workflow-automation CLI.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class AppSettings(BaseSettings):
    """Settings for the local workflow store.

    Environment variables:
    - LOG_LEVEL            (optional)
    - WORKFLOW_STATE_PATH  (optional)

    Notes:
        Tests can point at a different env file via `AppSettings(_env_file=path)`.
    """

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    state_path: Path = Field(
        default=Path("workflow_state"),
        validation_alias="WORKFLOW_STATE_PATH",
        description="Directory where workflows and users are persisted as JSON",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def workflows_state_file(self) -> Path:
        """Path where workflow aggregates are persisted."""

        return self.state_path / "workflows.json"

    @property
    def users_state_file(self) -> Path:
        """Path where registered users are persisted."""

        return self.state_path / "users.json"
