"""Configuration management for the bucket recovery tool."""

from __future__ import annotations

import logging
import os
import tempfile
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class SplunkSettings(BaseModel):
    home: str = Field(default="/opt/splunk")
    binary: str | None = Field(
        default=None,
        description="Path to the splunk executable. Derived from home when unset.",
    )
    username: str | None = Field(default=None)
    password: str | None = Field(default=None)

    @property
    def executable(self) -> str:
        if self.binary:
            return self.binary
        name = "splunk.exe" if os.name == "nt" else "splunk"
        return str(Path(self.home) / "bin" / name)

    @property
    def auth(self) -> str | None:
        if self.username and self.password:
            return f"{self.username}:{self.password}"
        return None


class RecoverySettings(BaseModel):
    quarantine_root: str = Field(default="./quarantine")
    export_temp_dir: str = Field(default_factory=tempfile.gettempdir)
    halt_on_export_failure: bool = Field(
        default=False,
        description=(
            "If True, a bucket whose export failed is left in place instead of "
            "being quarantined and re-imported."
        ),
    )


class ExecutionSettings(BaseModel):
    timeout_seconds: float | None = Field(
        default=None,
        description="Per-invocation timeout for splunk commands. None waits forever.",
    )
    max_output_characters: int = Field(default=20_000, ge=1, le=1_000_000)

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError("timeout_seconds must be positive")
        return value


class SelectionSettings(BaseModel):
    path: str | None = Field(default=None, description="Optional index selection YAML file")


class Settings(BaseModel):
    splunk: SplunkSettings = Field(default_factory=SplunkSettings)
    recovery: RecoverySettings = Field(default_factory=RecoverySettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)


ENV_KEYS = {
    "splunk_home": "SPLUNK_HOME",
    "splunk_binary": "SPLUNK_BINARY",
    "splunk_username": "SPLUNK_USERNAME",
    "splunk_password": "SPLUNK_PASSWORD",
    "quarantine_root": "QUARANTINE_ROOT",
    "export_temp_dir": "EXPORT_TEMP_DIR",
    "halt_on_export_failure": "RECOVERY_HALT_ON_EXPORT_FAILURE",
    "timeout": "TOOL_TIMEOUT_SECONDS",
    "max_output": "MAX_OUTPUT_CHARACTERS",
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "selection_path": "INDEX_SELECTION_PATH",
}

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _resolve_path(path: str) -> str:
    return str(Path(path).expanduser().resolve())


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float | None) -> float | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def _env_optional(key: str) -> str | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    log_file_env = _env_optional(ENV_KEYS["log_file"])
    selection_env = _env_optional(ENV_KEYS["selection_path"])
    binary_env = _env_optional(ENV_KEYS["splunk_binary"])

    settings_data: dict[str, object] = {
        "splunk": {
            "home": os.getenv(ENV_KEYS["splunk_home"], SplunkSettings().home),
            "binary": binary_env,
            "username": _env_optional(ENV_KEYS["splunk_username"]),
            "password": _env_optional(ENV_KEYS["splunk_password"]),
        },
        "recovery": {
            "quarantine_root": _resolve_path(
                os.getenv(ENV_KEYS["quarantine_root"], RecoverySettings().quarantine_root)
            ),
            "export_temp_dir": _resolve_path(
                os.getenv(ENV_KEYS["export_temp_dir"], RecoverySettings().export_temp_dir)
            ),
            "halt_on_export_failure": _env_bool(
                ENV_KEYS["halt_on_export_failure"],
                RecoverySettings().halt_on_export_failure,
            ),
        },
        "execution": {
            "timeout_seconds": _env_float(
                ENV_KEYS["timeout"],
                ExecutionSettings().timeout_seconds,
            ),
            "max_output_characters": _env_int(
                ENV_KEYS["max_output"],
                ExecutionSettings().max_output_characters,
            ),
        },
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
        },
        "selection": {
            "path": _resolve_path(selection_env) if selection_env else None,
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
