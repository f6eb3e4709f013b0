from __future__ import annotations

import os
from pathlib import Path

import pytest

from splunk_bucket_doctor import config


def test_env_int_uses_default_for_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_INT_VALUE", "")
    assert config._env_int("TEST_INT_VALUE", 7) == 7


def test_env_int_invalid_value_returns_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_INT_INVALID", "not_a_number")
    assert config._env_int("TEST_INT_INVALID", 42) == 42


def test_env_float_invalid_value_returns_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_FLOAT_INVALID", "soon")
    assert config._env_float("TEST_FLOAT_INVALID", None) is None


def test_env_bool(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_BOOL", " Yes ")
    assert config._env_bool("TEST_BOOL", False) is True
    monkeypatch.setenv("TEST_BOOL", "0")
    assert config._env_bool("TEST_BOOL", True) is False
    monkeypatch.delenv("TEST_BOOL")
    assert config._env_bool("TEST_BOOL", True) is True


def test_executable_derived_from_home() -> None:
    settings = config.SplunkSettings(home="/srv/splunk")
    name = "splunk.exe" if os.name == "nt" else "splunk"
    assert settings.executable == str(Path("/srv/splunk") / "bin" / name)
    assert settings.auth is None


def test_load_settings_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPLUNK_HOME", "/srv/splunk")
    monkeypatch.setenv("SPLUNK_BINARY", "/usr/local/bin/splunk")
    monkeypatch.setenv("SPLUNK_USERNAME", "admin")
    monkeypatch.setenv("SPLUNK_PASSWORD", "changeme")
    monkeypatch.setenv("QUARANTINE_ROOT", str(tmp_path / "q"))
    monkeypatch.setenv("RECOVERY_HALT_ON_EXPORT_FAILURE", "true")
    monkeypatch.setenv("TOOL_TIMEOUT_SECONDS", "90")
    monkeypatch.setenv("INDEX_SELECTION_PATH", str(tmp_path / "indexes.yaml"))

    settings = config.load_settings()

    assert settings.splunk.executable == "/usr/local/bin/splunk"
    assert settings.splunk.auth == "admin:changeme"
    assert settings.recovery.quarantine_root == str((tmp_path / "q").resolve())
    assert settings.recovery.halt_on_export_failure is True
    assert settings.execution.timeout_seconds == 90.0
    assert settings.selection.path == str((tmp_path / "indexes.yaml").resolve())
    assert config.load_settings() is settings


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in config.ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)

    settings = config.load_settings()

    assert settings.splunk.home == "/opt/splunk"
    assert settings.execution.timeout_seconds is None
    assert settings.recovery.halt_on_export_failure is False
    assert Path(settings.recovery.quarantine_root).is_absolute()
    assert settings.selection.path is None


def test_load_settings_raises_runtime_error_on_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOOL_TIMEOUT_SECONDS", "0")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        config.load_settings()
