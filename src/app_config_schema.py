"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "POMODORO_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class PomodoroSettings:
    """Period durations and cycle options from `[pomodoro]`."""
    work_minutes: float = 25.0
    short_break_minutes: float = 5.0
    long_break_minutes: float = 15.0
    count_backwards: bool = False
    long_break_every: int = 4


@dataclass(frozen=True)
class RuntimeSettings:
    """Host loop cadence and logging from `[runtime]`."""
    tick_interval_seconds: float = 1.0
    log_level: str = "INFO"
    confirm_timeout_seconds: float = 30.0


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in websocket event server settings from `[ui_server]`."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""
    accept_commands: bool = True


@dataclass(frozen=True)
class AppConfig:
    pomodoro: PomodoroSettings
    runtime: RuntimeSettings
    ui_server: UIServerSettings
    source_file: str
