"""Canonical console command names and their aliases."""

from __future__ import annotations

from pomodoro import PeriodStatus, PeriodType

COMMAND_GO = "go"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESUME = "resume"
COMMAND_RESET = "reset"
COMMAND_STATUS = "status"
COMMAND_NEXT = "next"
COMMAND_HELP = "help"
COMMAND_EXIT = "exit"

COMMAND_NAME_ORDER: tuple[str, ...] = (
    COMMAND_GO,
    COMMAND_START,
    COMMAND_PAUSE,
    COMMAND_RESUME,
    COMMAND_RESET,
    COMMAND_STATUS,
    COMMAND_NEXT,
    COMMAND_HELP,
    COMMAND_EXIT,
)

COMMAND_ALIASES: dict[str, str] = {
    "play": COMMAND_GO,
    "": COMMAND_GO,
    "continue": COMMAND_RESUME,
    "unpause": COMMAND_RESUME,
    "stop": COMMAND_RESET,
    "quit": COMMAND_EXIT,
    "q": COMMAND_EXIT,
    "?": COMMAND_HELP,
}

# Commands that map one-to-one onto a requested period status.
COMMAND_TO_REQUESTED_STATUS: dict[str, PeriodStatus] = {
    COMMAND_PAUSE: PeriodStatus.PAUSED,
    COMMAND_RESUME: PeriodStatus.RUNNING,
    COMMAND_RESET: PeriodStatus.STOPPED,
}

PERIOD_ARGUMENTS: dict[str, PeriodType] = {
    "work": PeriodType.WORK,
    "pomodoro": PeriodType.WORK,
    "short": PeriodType.SHORT_BREAK,
    "short_break": PeriodType.SHORT_BREAK,
    "long": PeriodType.LONG_BREAK,
    "long_break": PeriodType.LONG_BREAK,
}

AFFIRMATIVE_ANSWERS: frozenset[str] = frozenset({"y", "yes", "j", "ja"})


def canonical_command(name: str) -> str:
    """Resolve aliases; unknown names are returned lower-cased and unchanged."""
    lowered = name.strip().lower()
    return COMMAND_ALIASES.get(lowered, lowered)


def command_names_csv() -> str:
    """Return command names as `a, b, c` for help text."""
    return ", ".join(COMMAND_NAME_ORDER)
