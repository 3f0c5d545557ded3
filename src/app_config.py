"""Config file resolution and loading for the pomodoro runtime."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Mapping

from app_config_parser import parse_app_config
from app_config_schema import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    PomodoroSettings,
    RuntimeSettings,
    UIServerSettings,
)

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "PomodoroSettings",
    "RuntimeSettings",
    "UIServerSettings",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    raw = config_path or env.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load `config.toml`; built-in defaults apply when no file was requested and none exists."""
    env = environ if environ is not None else os.environ
    explicit = bool(config_path or env.get(CONFIG_FILE_ENV))
    path = resolve_config_path(config_path, environ=env)

    if not path.exists():
        if explicit:
            raise AppConfigurationError(f"Config file not found: {path}")
        return parse_app_config({}, base_dir=Path.cwd(), source_file="")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))
