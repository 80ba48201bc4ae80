"""
Runtime settings.

Defaults are module constants, overridden by the environment and then by
command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from tudu.errors import ConfigError
from tudu.notification import FLASH_SECONDS

POLL_TIMEOUT = 1.0
LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DATA_FILE_NAME = "todos.json"


def default_data_file(env: Mapping[str, str] | None = None) -> Path:
    """``$XDG_DATA_HOME/tudu/todos.json``, falling back to ``~/.local/share``."""
    env = os.environ if env is None else env
    base = env.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / "tudu" / DATA_FILE_NAME


def _positive_float(name: str, value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {value!r}") from None
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return parsed


@dataclass
class Settings:
    data_file: Path = field(default_factory=default_data_file)
    poll_timeout: float = POLL_TIMEOUT
    flash_seconds: float = FLASH_SECONDS
    log_file: Path | None = None
    log_level: str = LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``TUDU_*`` environment variables."""
        env = os.environ if env is None else env
        data_file = env.get("TUDU_FILE")
        log_file = env.get("TUDU_LOG_FILE")
        log_level = (env.get("TUDU_LOG_LEVEL") or LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"TUDU_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return cls(
            data_file=Path(data_file).expanduser() if data_file else default_data_file(env),
            poll_timeout=_positive_float(
                "TUDU_POLL_TIMEOUT", env.get("TUDU_POLL_TIMEOUT"), POLL_TIMEOUT
            ),
            flash_seconds=_positive_float(
                "TUDU_FLASH_SECONDS", env.get("TUDU_FLASH_SECONDS"), FLASH_SECONDS
            ),
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=log_level,
        )
