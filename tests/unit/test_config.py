"""
Unit tests for settings and state directory resolution.

Resolution order under test:
  CERTSPOTTER_STATE_DIR → STATE_DIRECTORY (systemd only) → ~/.certspotter
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from certspotter_authorize.config import AppSettings

_ENV_VARS = (
    "CERTSPOTTER_STATE_DIR",
    "CERTSPOTTER_LOG_LEVEL",
    "STATE_DIRECTORY",
    "SYSTEMD_EXEC_PID",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Strip state-related variables and point HOME at a scratch directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


class TestStateDirResolution:
    def test_defaults_to_dot_certspotter_in_home(self, clean_env: Path) -> None:
        assert AppSettings().resolve_state_dir() == clean_env / ".certspotter"

    def test_certspotter_state_dir_wins(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("CERTSPOTTER_STATE_DIR", str(tmp_path / "explicit"))
        monkeypatch.setenv("STATE_DIRECTORY", str(tmp_path / "systemd"))
        monkeypatch.setenv("SYSTEMD_EXEC_PID", str(os.getpid()))
        assert AppSettings().resolve_state_dir() == tmp_path / "explicit"

    def test_systemd_state_directory_when_supervised(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """
        GIVEN STATE_DIRECTORY and SYSTEMD_EXEC_PID equal to our pid
        WHEN the state directory is resolved
        THEN STATE_DIRECTORY is used.
        """
        monkeypatch.setenv("STATE_DIRECTORY", str(tmp_path / "systemd"))
        monkeypatch.setenv("SYSTEMD_EXEC_PID", str(os.getpid()))
        settings = AppSettings()
        assert settings.started_by_supervisor()
        assert settings.resolve_state_dir() == tmp_path / "systemd"

    def test_systemd_state_directory_ignored_for_other_pid(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, clean_env: Path
    ) -> None:
        """
        GIVEN STATE_DIRECTORY inherited from a parent systemd service
        WHEN this process was not the one systemd exec'd
        THEN the home default is used instead.
        """
        monkeypatch.setenv("STATE_DIRECTORY", str(tmp_path / "systemd"))
        monkeypatch.setenv("SYSTEMD_EXEC_PID", str(os.getpid() + 1))
        settings = AppSettings()
        assert not settings.started_by_supervisor()
        assert settings.resolve_state_dir() == clean_env / ".certspotter"

    def test_empty_variable_counts_as_unset(self, monkeypatch: pytest.MonkeyPatch, clean_env: Path) -> None:
        monkeypatch.setenv("CERTSPOTTER_STATE_DIR", "")
        assert AppSettings().resolve_state_dir() == clean_env / ".certspotter"


class TestLogLevel:
    def test_default_is_warning(self) -> None:
        assert AppSettings().log_level == "WARNING"

    def test_normalized_to_upper_case(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CERTSPOTTER_LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_unknown_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CERTSPOTTER_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="Unknown log level"):
            AppSettings()
