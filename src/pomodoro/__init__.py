from .config import PomodoroConfig, PomodoroConfigurationError
from .models import (
    PeriodAction,
    PeriodStatus,
    PeriodType,
    PomodoroChange,
    PomodoroSnapshot,
    PomodoroTick,
    Quote,
    TransitionResult,
)
from .quotes import RandomQuoteProvider
from .service import PomodoroEngine
from .stopwatch import Stopwatch
from .transitions import resolve_action, resolve_next_period

__all__ = [
    "PeriodAction",
    "PeriodStatus",
    "PeriodType",
    "PomodoroChange",
    "PomodoroConfig",
    "PomodoroConfigurationError",
    "PomodoroEngine",
    "PomodoroSnapshot",
    "PomodoroTick",
    "Quote",
    "RandomQuoteProvider",
    "Stopwatch",
    "TransitionResult",
    "resolve_action",
    "resolve_next_period",
]
