"""
Configuration — typed settings loaded from the environment.

Uses pydantic-settings to:
  - Load from environment variables
  - Validate types at startup
  - Treat empty variables as unset

State directory resolution (first match wins):
  1. --state-dir on the command line (applied by the CLI)
  2. CERTSPOTTER_STATE_DIR
  3. STATE_DIRECTORY, only when systemd started this process
     (SYSTEMD_EXEC_PID equals our pid)
  4. ~/.certspotter
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATE_DIR_NAME = ".certspotter"


class AppSettings(BaseSettings):
    """
    Root application settings.

    Fields with an explicit validation_alias read that exact variable name;
    the others use the CERTSPOTTER_ prefix (CERTSPOTTER_LOG_LEVEL, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="CERTSPOTTER_",
        env_ignore_empty=True,
        extra="ignore",
    )

    state_dir: Path | None = Field(
        default=None,
        description="State directory shared with the monitor",
    )
    systemd_state_directory: Path | None = Field(
        default=None,
        validation_alias="STATE_DIRECTORY",
        description="State directory assigned by systemd",
    )
    systemd_exec_pid: str | None = Field(
        default=None,
        validation_alias="SYSTEMD_EXEC_PID",
        description="PID systemd exec'd; identifies a supervised start",
    )
    log_level: str = Field(
        default="WARNING",
        description="structlog filtering level; WARNING keeps successful runs silent",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    def started_by_supervisor(self) -> bool:
        return self.systemd_exec_pid == str(os.getpid())

    def resolve_state_dir(self) -> Path:
        """Apply the resolution order above (minus the command-line override)."""
        if self.state_dir is not None:
            return self.state_dir
        if self.systemd_state_directory is not None and self.started_by_supervisor():
            return self.systemd_state_directory
        return Path.home() / DEFAULT_STATE_DIR_NAME
