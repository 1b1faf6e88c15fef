"""Runtime settings for the `stepflow` CLI and embedding applications.

Configuration is loaded from:
- environment variables (prefixed with `STEPFLOW_`)
- and a local `.env` file (if present)

The engine itself takes no configuration; these settings only drive logging.
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stepflow.logging import LogFormat, configure_logging

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class StepflowSettings(BaseSettings):
    """Settings for stepflow.

    Environment variables:
    - STEPFLOW_LOG_LEVEL   (optional)
    - STEPFLOW_LOG_FORMAT  (optional, `json` or `text`)
    - STEPFLOW_DEBUG       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `StepflowSettings(_env_file=path_to_env)`.
    """

    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )
    log_format: LogFormat = Field(
        default="json",
        description="Log output format",
    )
    debug: bool = Field(
        default=False,
        description="Log every step decision of the runner at DEBUG level",
    )

    model_config = SettingsConfigDict(
        env_prefix="STEPFLOW_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(self.log_level, self.log_format)

        if self.debug:
            logging.getLogger("stepflow").setLevel(logging.DEBUG)
