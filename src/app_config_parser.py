"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    PomodoroSettings,
    RuntimeSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    pomodoro = _parse_pomodoro_settings(_section(raw, "pomodoro"))
    runtime = _parse_runtime_settings(_section(raw, "runtime"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        pomodoro=pomodoro,
        runtime=runtime,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_pomodoro_settings(section: Mapping[str, Any]) -> PomodoroSettings:
    return PomodoroSettings(
        work_minutes=_as_positive_float(
            section.get("work_minutes", 25),
            "pomodoro.work_minutes",
        ),
        short_break_minutes=_as_positive_float(
            section.get("short_break_minutes", 5),
            "pomodoro.short_break_minutes",
        ),
        long_break_minutes=_as_positive_float(
            section.get("long_break_minutes", 15),
            "pomodoro.long_break_minutes",
        ),
        count_backwards=_as_bool(
            section.get("count_backwards", False),
            "pomodoro.count_backwards",
        ),
        long_break_every=_as_positive_int(
            section.get("long_break_every", 4),
            "pomodoro.long_break_every",
        ),
    )


def _parse_runtime_settings(section: Mapping[str, Any]) -> RuntimeSettings:
    return RuntimeSettings(
        tick_interval_seconds=_as_positive_float(
            section.get("tick_interval_seconds", 1.0),
            "runtime.tick_interval_seconds",
        ),
        log_level=_as_log_level(section.get("log_level", "INFO"), "runtime.log_level"),
        confirm_timeout_seconds=_as_positive_float(
            section.get("confirm_timeout_seconds", 30.0),
            "runtime.confirm_timeout_seconds",
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", False), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
        accept_commands=_as_bool(
            section.get("accept_commands", True),
            "ui_server.accept_commands",
        ),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a number.") from error
    raise AppConfigurationError(f"{field} must be a number.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_positive_float(value: Any, field: str) -> float:
    number = _as_float(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_log_level(value: Any, field: str) -> str:
    level = _as_str(value, field).upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}")
    return level


def log_level_value(name: str) -> int:
    """Translate a validated level name into its `logging` constant."""
    return getattr(logging, name.upper(), logging.INFO)


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
